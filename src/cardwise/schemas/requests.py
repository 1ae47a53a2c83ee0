import datetime as dt

from pydantic import BaseModel, Field

from cardwise.domain.models import Category, FinancialEvent, ShoppingItem


class RecommendRequest(BaseModel):
    amount: float = Field(ge=0)
    category: Category
    include_advice: bool = False
    as_of: dt.date | None = None


class PlanRequest(BaseModel):
    items: list[ShoppingItem] = Field(default_factory=list)
    bills: list[FinancialEvent] = Field(default_factory=list)
