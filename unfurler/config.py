from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Unfurler"
    APP_VERSION: str = "0.1.0"

    # Fetching: one attempt, no retries
    FETCH_TIMEOUT: float = 10.0  # seconds, applies to connect and read
    FOLLOW_REDIRECTS: bool = True
    USER_AGENT: str = (
        "Mozilla/5.0 (compatible; Unfurler/0.1; +https://github.com/unfurler/unfurler)"
    )
    ACCEPT: str = "text/html,application/xhtml+xml,image/*;q=0.8,*/*;q=0.5"

    # Logging
    LOG_FORMAT: str = "text"  # "json" for production, "text" for development
    LOG_LEVEL: str = "INFO"

    # Metrics
    METRICS_ENABLED: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
