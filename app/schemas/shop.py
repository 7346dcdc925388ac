from pydantic import BaseModel
from typing import Optional


class ShopEditRequest(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
