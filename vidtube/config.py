from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    mongodb_uri: str = "mongodb://localhost:27017"
    database_name: str = "vidtube"
    mongo_timeout_ms: int = 5000
    create_indexes: bool = True
    cors_origins: list[str] = ["*"]
    user_header: str = "X-User-Id"
    video_search_index: str = "search-videos"
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    upload_timeout: float = 120.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
