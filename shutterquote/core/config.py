import os
from decimal import Decimal
from functools import lru_cache


class Settings:
    """Simple settings loaded from environment.

    Uses dotenv if present (optional) and falls back to sensible defaults.
    """

    def __init__(self) -> None:
        # Attempt to load .env if python-dotenv is available
        try:
            from dotenv import load_dotenv  # type: ignore

            load_dotenv()
        except ImportError:
            pass

        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./shutterquote.db")
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
        self.API_KEY: str = os.getenv("API_KEY", "dev-local-key")
        self.ADMIN_API_KEY: str = os.getenv("ADMIN_API_KEY", "dev-admin-key")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.QUOTATION_PREFIX: str = os.getenv("QUOTATION_PREFIX", "QT")
        self.CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "€")
        self.DEFAULT_VAT_PERCENTAGE: Decimal = Decimal(os.getenv("DEFAULT_VAT_PERCENTAGE", "20"))
        self.VERIFY_SUBMITTED_TOTALS: bool = os.getenv("VERIFY_SUBMITTED_TOTALS", "1") == "1"
        self.COMPANY_NAME: str | None = os.getenv("COMPANY_NAME")
        self.PORT: int = int(os.getenv("PORT", "8000"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
