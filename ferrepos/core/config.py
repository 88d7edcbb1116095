from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pydantic import field_validator

class Settings(BaseSettings):
    # Database settings
    POSTGRES_USER: str = 'ferrepos_user'
    POSTGRES_PASSWORD: str = 'ferrepos_pass'
    POSTGRES_DB: str = 'ferrepos_db'
    POSTGRES_HOST: str = 'postgres'
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = None  # Sobrescribe la URL de Postgres (ej. sqlite para pruebas)

    # JWT settings
    APP_SECRET_STRING: str = 'your-super-secret-key-here-change-in-production-2024'
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # Super administrador del SaaS
    SUPERADMIN_EMAIL: str = 'admin@softec.com'
    SUPERADMIN_PASSWORD: str = 'admin123'

    # Gemini (descripciones y análisis de ventas)
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = 'gemini-2.5-flash'
    GEMINI_API_URL: str = 'https://generativelanguage.googleapis.com/v1beta'
    GEMINI_TIMEOUT: float = 15.0

    # Negocio
    INVOICE_DUE_DAYS: int = 10
    LOW_STOCK_DEFAULT: int = 5

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    model_config = SettingsConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("DEBUG", mode="before")
    @classmethod
    def parse_debug(cls, v):
        if isinstance(v, str):
            return v.lower().strip('"').strip("'") in ("true", "1", "yes", "on")
        return bool(v)

settings = Settings()
