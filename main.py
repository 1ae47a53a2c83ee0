import argparse
import logging

from cardwise.api.app import run as run_api
from cardwise.config import settings
from cardwise.integrations.telegram_bot import main as run_bot


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cardwise unified entrypoint")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["api", "bot"],
        default="api",
        help="Run mode: api (default), bot",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.mode == "api":
        run_api()
        return

    run_bot()


if __name__ == "__main__":
    main()
