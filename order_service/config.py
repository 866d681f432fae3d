import os
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: Optional[str] = os.getenv("DATABASE_URL")
    mysql_host: str = os.getenv("MYSQL_HOST", "localhost")
    mysql_port: int = int(os.getenv("MYSQL_PORT", "3306"))
    mysql_user: str = os.getenv("MYSQL_USER", "order_user")
    mysql_password: str = os.getenv("MYSQL_PASSWORD", "order_pass")
    mysql_database: str = os.getenv("MYSQL_DATABASE", "order_service")

    # Connection pool
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    db_max_overflow: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    db_pool_recycle: int = int(os.getenv("DB_POOL_RECYCLE", "1800"))
    db_wait_timeout: int = int(os.getenv("DB_WAIT_TIMEOUT", "60"))

    # Application
    app_name: str = "Order Service"
    api_prefix: str = "/api"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # Listing
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    # "window" pushes offset/limit into the query, "memory" slices the full listing
    pagination_strategy: str = os.getenv("PAGINATION_STRATEGY", "window")

    seed_sample_data: bool = os.getenv("SEED_SAMPLE_DATA", "false").lower() == "true"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()


# Database URL
def get_database_url(config: Optional[Settings] = None) -> str:
    config = config or settings
    if config.database_url:
        return config.database_url
    return f"mysql+pymysql://{config.mysql_user}:{config.mysql_password}@{config.mysql_host}:{config.mysql_port}/{config.mysql_database}"
