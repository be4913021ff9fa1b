from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    WHATSAPP_API_URL: str | None = None
    PHONE_NUMBER_ID: str | None = None
    WHATSAPP_ACCESS_TOKEN: str | None = None
    WHATSAPP_WEBHOOK_VERIFY_TOKEN: str = ""
    WHATSAPP_TIMEOUT_SECONDS: float = 10.0

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    MESSAGES_DEFAULT_LIMIT: int = 50

    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}


settings = Settings()
