from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    card_catalog_file: str = "data/cards/my_cards.json"
    transaction_file: str = "data/transactions.json"
    pooled_spend_threshold: float = 5_000_000

    telegram_bot_token: str = ""
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1-mini"
    advisory_timeout_s: float = 15.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
