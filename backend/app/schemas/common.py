from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class MessageResponse(BaseModel):
    message: str


class PaginationOut(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


Money = Decimal
