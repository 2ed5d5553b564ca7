from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Reporting
    DEFAULT_CURRENCY: str = "CAD"

    # Engine
    SORT_TRANSACTIONS: bool = True  # stable sort by sort_order before the fold

    model_config = {"env_file": ".env", "env_prefix": "ACB_", "extra": "ignore"}

settings = Settings()
