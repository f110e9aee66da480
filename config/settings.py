"""
Settings Configuration
Pydantic-based configuration, read once from the environment.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class DogApiSettings(BaseSettings):
    """TheDogAPI source configuration"""
    api_key: Optional[str] = Field(default=None, description="TheDogAPI access key (optional)")
    base_url: str = Field(default="https://api.thedogapi.com/v1", description="API base URL")
    image_size: str = Field(default="med", description="Requested image size")
    mime_types: str = Field(default="jpg,png", description="Allowed image formats")
    has_breeds: bool = Field(default=True, description="Ask the API for images with breed metadata")
    batch_size: int = Field(default=1, ge=1, le=25, description="Candidates requested per call")

    class Config:
        env_prefix = "DOGAPI_"


class RetrievalSettings(BaseSettings):
    """Retry loop defaults"""
    max_attempts: int = Field(default=8, ge=1, description="Primary calls before giving up")
    timeout_ms: int = Field(default=8000, gt=0, description="Per-call timeout (ms)")
    backoff_ms: int = Field(default=300, ge=0, description="Delay between attempts (ms)")
    strict: bool = Field(default=True, description="Discard candidates without breed metadata")
    history_limit: int = Field(default=50, ge=0, description="Accepted records kept in memory")

    class Config:
        env_prefix = "RETRIEVAL_"


class Settings(BaseSettings):
    """Top-level settings aggregating all sub-configs"""

    dogapi: DogApiSettings = Field(default_factory=DogApiSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """Load settings, seeding the environment from a .env file when present"""
        if env_path is None:
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            dogapi=DogApiSettings(),
            retrieval=RetrievalSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings singleton"""
    return Settings.load_from_env_file()
