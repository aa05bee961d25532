from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "ClassPet"
    APP_VERSION: str = "1.0.0"
    SECRET_KEY: str = "dev-secret-key-change-me"
    DATABASE_URL: str = "sqlite:///classpet.db"
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    JWT_ALGORITHM: str = "HS256"
    AUTH_COOKIE_NAME: str = "classpet_token"

    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Hunger decay job; an interval of 0 turns it off
    HUNGER_DECAY_AMOUNT: int = 5
    HUNGER_DECAY_INTERVAL_MINUTES: int = 60

    RECENT_TRANSACTIONS_LIMIT: int = 50


settings = Settings()
