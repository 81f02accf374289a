from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "ministry-form-settings"

    ADMIN_JWT_TTL_MINUTES: int = 240
    ADMIN_JWT_SECRET: str = "change_me_admin"

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5000"

    DATABASE_URL: str

    # Base URL the editor client talks to (the admin API of this service)
    FORM_CONFIG_API_URL: str = "http://localhost:8000/api/ministry-admin"
    FORM_CONFIG_CLIENT_TIMEOUT_SECONDS: float = 15.0
    FORM_CUSTOM_FIELDS_MAX: int = 50
    FORM_LABEL_MAX_LENGTH: int = 200
    FORM_TEXT_MAX_LENGTH: int = 2000

    # Compose/infra vars that may exist in shared .env
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "ministry"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
