"""
Application configuration
"""
from dataclasses import dataclass
from typing import List, Optional

from pydantic_settings import BaseSettings


@dataclass(frozen=True)
class GithubAppConfig:
    """Credentials of one GitHub App, handed to the auth layer explicitly."""

    app_id: Optional[str]
    private_key_path: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.app_id and self.private_key_path)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "GitHub Metadata API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["*"]

    # GitHub
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_GRAPHQL_URL: str = "https://api.github.com/graphql"
    GITHUB_TIMEOUT_SECONDS: float = 30.0
    COMMIT_LIMIT: int = 100

    # Metadata Extractor for FAIRsoft (GitHub App)
    EXTRACTOR_APP_ID: Optional[str] = None
    EXTRACTOR_PRIVATE_KEY_PATH: Optional[str] = None

    # Metadata Updater for FAIRsoft (GitHub App)
    UPDATER_APP_ID: Optional[str] = None
    UPDATER_PRIVATE_KEY_PATH: Optional[str] = None
    COMMITTER_NAME: str = "Metadata Updater for FAIRsoft"
    COMMITTER_EMAIL: str = "openebench@bsc.es"

    class Config:
        env_file = ".env"
        case_sensitive = True

    def extractor_app(self) -> GithubAppConfig:
        return GithubAppConfig(self.EXTRACTOR_APP_ID, self.EXTRACTOR_PRIVATE_KEY_PATH)

    def updater_app(self) -> GithubAppConfig:
        return GithubAppConfig(self.UPDATER_APP_ID, self.UPDATER_PRIVATE_KEY_PATH)


settings = Settings()
