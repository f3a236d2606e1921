"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "https://elm.nyc",
    ]

    # GitHub (issue target)
    github_repo: str = ""
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    http_timeout: float = 15.0

    # Issue formatting
    issue_label: str = "contact-form"
    issue_title_prefix: str = ""
    site_name: str = "elm.nyc"
    user_agent: str = "elm-contact-form"

    # Size guard on the serialized submission
    max_payload_size: int = 50_000

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_configured(self) -> bool:
        """True when the issue target and its credential are both set."""
        return bool(self.github_repo and self.github_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
