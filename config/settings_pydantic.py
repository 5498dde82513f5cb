"""Pydantic Settings for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings using Pydantic."""

    # Project paths
    project_root: Path = Path(__file__).parent.parent
    data_dir: Path = project_root / "data"
    storage_path: Path = data_dir / "local_storage.db"
    log_file: Path | None = None
    log_level: str = "INFO"

    # Yahoo Finance ticker search
    yahoo_search_url: str = "https://query1.finance.yahoo.com/v1/finance/search"
    search_results_limit: int = 10
    search_quote_types: tuple[str, ...] = ("EQUITY", "ETF")
    # The search endpoint rejects clients that do not look like a browser
    user_agent: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)"

    # Zacks quote feed
    zacks_quote_url: str = "https://quote-feed.zacks.com/index"
    http_timeout_seconds: float = 10.0

    # Recents list
    recents_key: str = "recent-tickers"
    max_recents: int = 10

    # Outbound links
    zacks_web_url_template: str = "https://www.zacks.com/stock/quote/{ticker}"
    icon_url_template: str = "https://assets.parqet.com/logos/symbol/{ticker}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ZACKSRANK_",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
