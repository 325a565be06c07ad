import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Travel App Backend")
    # Core settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET", "dev-secret-key-change-me"))
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    PORT: int = int(os.getenv("PORT", "3030"))

    # Auth tokens
    TOKEN_MAX_AGE_DAYS: int = int(os.getenv("TOKEN_MAX_AGE_DAYS", "7"))
    TOKEN_MAX_AGE_SECONDS: int = TOKEN_MAX_AGE_DAYS * 24 * 60 * 60

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./travelapp.db")

    # CORS
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    RATE_LIMIT_DEFAULT: str = os.getenv("RATE_LIMIT_DEFAULT", "100/minute")
    RATE_LIMIT_AUTH_API: str = os.getenv("RATE_LIMIT_AUTH_API", "10/minute")

settings = Settings()
