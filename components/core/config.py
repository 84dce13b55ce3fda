"""Runtime settings, read from the environment or a ``.env`` file."""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database; DB_URL wins over the MySQL parts when set
    DB_URL: Optional[str] = None
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "proserv"

    API_VERSION: str = "v1"
    DEBUG: bool = False  # Also echoes SQL
    LOG_LEVEL: str = "INFO"

    # Access tokens
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Mercado Pago checkout; upgrades fail with 502 until the token is set
    MERCADO_PAGO_ACCESS_TOKEN: Optional[str] = None
    MERCADO_PAGO_API_URL: str = "https://api.mercadopago.com"
    APP_URL: str = "https://app.base44.com"
    CURRENCY_ID: str = "BRL"

    # Snapshot caps per screen; aggregates above the cap are undercounts
    DASHBOARD_LIST_LIMIT: int = 100
    AGENDA_LIST_LIMIT: int = 500
    FINANCIAL_LIST_LIMIT: int = 500
    REPORT_LIST_LIMIT: int = 1000
    ADMIN_LIST_LIMIT: int = 500

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def async_db_url(self) -> str:
        """SQLAlchemy async URL, aiomysql unless DB_URL says otherwise."""
        if self.DB_URL:
            return self.DB_URL
        return f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
