from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Metabolic Formula Planner API"
    LOG_LEVEL: str = "INFO"

    # Request defaults used when a caller omits preparation settings
    DEFAULT_FEEDS_PER_DAY: int = 8
    DEFAULT_SCOOP_SIZE_G: float = 5.0
    DEFAULT_WATER_PER_SCOOP_ML: float = 30.0

    class Config:
        env_file = ".env"


settings = Settings()
