from pydantic import BaseModel

from cardwise.domain.models import CardUsageStatus, OptimizationResult


class RecommendResponse(BaseModel):
    best_card: OptimizationResult
    ranked_cards: list[OptimizationResult]
    card_status: str
    advice: str | None = None


class UsageResponse(BaseModel):
    cards: list[CardUsageStatus]
    priority_card: CardUsageStatus | None = None
