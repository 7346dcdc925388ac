from pydantic import BaseModel, Field
from typing import Optional


class ScanResultRequest(BaseModel):
    text: str = Field(..., min_length=1)
    mode: Optional[str] = None
