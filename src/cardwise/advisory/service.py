import asyncio
import logging
from typing import Any

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

ADVICE_UNAVAILABLE = "Card advice is unavailable right now; the cashback figures above are unaffected."
HISTORY_UNAVAILABLE = "Spending analysis is unavailable right now."

CARD_ADVISOR_PROMPT = "You are a personal finance expert. Answer briefly and get straight to the point."
HISTORY_ADVISOR_PROMPT = (
    "You are a personal CFO. Give realistic feedback on the user's spending and "
    "quote concrete figures when you can."
)


class AdvisoryService:
    """Free-text advice from an LLM. Never used for any number we return."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4.1-mini",
        timeout_s: float = 15.0,
        client: Any | None = None,
    ):
        self.model = model
        self.timeout_s = timeout_s
        self._client = client
        if self._client is None and api_key:
            self._client = AsyncOpenAI(api_key=api_key)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def _complete(self, system_prompt: str, prompt: str, fallback: str) -> str:
        if self._client is None:
            return fallback

        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self.model,
                    temperature=0.3,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": prompt},
                    ],
                ),
                timeout=self.timeout_s,
            )
        except Exception:
            logger.warning("Advisory request failed", exc_info=True)
            return fallback

        content = response.choices[0].message.content if response.choices else None
        return content.strip() if content else fallback

    async def advise_card_usage(self, amount: float, category: str, card_status: str) -> str:
        prompt = (
            f"I want to buy something for {amount:,.0f} VND. Category: {category}.\n"
            f"Current card status: {card_status}\n"
            "Which of my cards should I use to get the most cashback? Explain briefly."
        )
        return await self._complete(CARD_ADVISOR_PROMPT, prompt, ADVICE_UNAVAILABLE)

    async def analyze_history(self, history: str, card_status: str) -> str:
        prompt = (
            "Analyse my spending.\n\n"
            f"SPENDING:\n{history}\n\n"
            f"CARD STATUS:\n{card_status}\n\n"
            "1. Did I use the right card for each purchase, or did I waste cashback?\n"
            "2. Which spending was essential and which was discretionary?\n"
            "3. Market versus supermarket: where should I buy what?\n"
            "4. Three concrete actions to save more next month.\n"
            "Answer in Markdown with bullet points."
        )
        return await self._complete(HISTORY_ADVISOR_PROMPT, prompt, HISTORY_UNAVAILABLE)
