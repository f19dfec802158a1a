from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Posts
    POSTS_DIR: str = "assets/posts"
    POSTS_PER_PAGE: int = 10
    RELATED_ARTICLES_COUNT: int = 5
    IMAGE_URL_PREFIX: str = "/api/post/img"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    BLOGMART_API_KEY: str = ""

    @property
    def posts_root(self) -> Path:
        return Path(self.POSTS_DIR).expanduser()


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
