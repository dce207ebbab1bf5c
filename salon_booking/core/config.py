from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Salon"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"
    DATA_DIR: str = "./data"

    DEFAULT_SLOT_MINUTES: int = 30
    CONFIRM_MIN_LEAD_MINUTES: int = 60
    CANCEL_MIN_LEAD_MINUTES: int = 120
    MODIFY_MIN_LEAD_HOURS: int = 24
    MAX_ADVANCE_DAYS: int = 183

    SEED_DEFAULT_SCHEDULES: bool = True


settings = Settings()
