from pydantic import BaseModel, Field


class StockAdjustRequest(BaseModel):
    delta: int = Field(..., description="Signed change, e.g. 1 or -1")


class VisibilityRequest(BaseModel):
    visible: bool


class AddToListRequest(BaseModel):
    product_id: int


class ConfirmRequest(BaseModel):
    confirm: bool = False
