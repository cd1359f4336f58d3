from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Database
    database_url: str = "sqlite:///./car_deals.db"

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]


settings = Settings()
