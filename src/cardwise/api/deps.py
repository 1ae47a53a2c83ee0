from functools import lru_cache

from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.config import settings


@lru_cache(maxsize=1)
def get_orchestrator() -> CashbackOrchestrator:
    return CashbackOrchestrator.from_settings(settings)
