import logging
import re

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes

from cardwise.advisory.summaries import describe_ranking
from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.config import settings
from cardwise.domain.models import CardUsageStatus, Category
from cardwise.engine.evaluator import format_vnd, parse_category
from cardwise.engine.usage import priority_card
from cardwise.schemas.requests import RecommendRequest

logger = logging.getLogger(__name__)

orchestrator = CashbackOrchestrator.from_settings(settings)

USAGE_HINT = "Usage: /best <amount> <category>, e.g. /best 500000 Shopee"

# Whole dong, optionally grouped in threes with "." or ",", e.g. 1.500.000.
_AMOUNT_PATTERN = re.compile(r"\d{1,3}(?:\.\d{3})+|\d{1,3}(?:,\d{3})+|\d+")


def parse_amount(raw: str) -> float:
    raw = raw.strip()
    if not _AMOUNT_PATTERN.fullmatch(raw):
        raise ValueError(f"Amount must be whole dong, e.g. 500000 or 1.500.000; got {raw!r}")
    return float(raw.replace(",", "").replace(".", ""))


def parse_best_args(args: list[str]) -> RecommendRequest:
    if len(args) != 2:
        raise ValueError(USAGE_HINT)
    raw_amount, raw_category = args
    amount = parse_amount(raw_amount)
    matched = next((item for item in Category if item.value.lower() == raw_category.lower()), raw_category)
    category = parse_category(matched)
    return RecommendRequest(amount=amount, category=category)


def format_usage(statuses: list[CardUsageStatus]) -> str:
    lines = []
    for status in statuses:
        cap = "no cap" if status.remaining_cap is None else f"{format_vnd(status.remaining_cap)} cap left"
        line = f"{status.card_name}: spent {format_vnd(status.total_spent)}, {cap}"
        if not status.met_min_spend:
            line += f", {format_vnd(status.remaining_min_spend)} to min spend"
        lines.append(line)
    focus = priority_card(statuses)
    if focus is not None:
        lines.append(f"Focus: {focus.card_name} needs {format_vnd(focus.remaining_min_spend)} more")
    return "\n".join(lines)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    categories = ", ".join(item.value for item in Category)
    await update.message.reply_text(f"{USAGE_HINT}\nCategories: {categories}")


async def best(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    try:
        request = parse_best_args(context.args or [])
        result = orchestrator.recommend(request)
    except ValueError as exc:
        await update.message.reply_text(f"Cannot compute: {exc}")
        return

    await update.message.reply_text(describe_ranking(request.amount, request.category, result.ranked_cards))

    if orchestrator.advisor is not None and orchestrator.advisor.enabled:
        advice = await orchestrator.advisor.advise_card_usage(
            request.amount, request.category.value, result.card_status
        )
        await update.message.reply_text(advice)


async def usage(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(format_usage(orchestrator.usage()))


def main() -> None:
    if not settings.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN is required.")

    app = Application.builder().token(settings.telegram_bot_token).build()
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("best", best))
    app.add_handler(CommandHandler("usage", usage))

    logger.info("Starting Telegram bot")
    app.run_polling()


if __name__ == "__main__":
    main()
