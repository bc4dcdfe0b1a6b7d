"""
Application settings.

Values come from environment variables (or a ``.env`` file next to the
working directory). ``get_settings()`` caches the parsed settings for
the lifetime of the process; tests build ``Settings`` directly and pass
them to ``create_app``.
"""

import json
from functools import lru_cache
from typing import Dict, List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing_extensions import Annotated, Literal


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = Field(default="AI Tools Directory")
    LOG_LEVEL: str = Field(default="INFO")
    SEED_DEMO_DATA: bool = Field(default=True)
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["http://localhost:5173"])

    # AI ranking
    RANKER_BACKEND: Literal["openai", "embedding", "none"] = Field(default="openai")
    OPENAI_API_KEY: Optional[str] = Field(default=None)
    OPENAI_MODEL: str = Field(default="gpt-4o")
    AI_RANK_TIMEOUT_SECONDS: float = Field(default=15.0, gt=0)
    EMBEDDING_MODEL_NAME: str = Field(default="sentence-transformers/all-MiniLM-L6-v2")
    EMBEDDING_MIN_SCORE: int = Field(default=50, ge=0, le=100)

    # Auth: bearer token -> username, as issued by the identity provider
    API_TOKENS: Dict[str, str] = Field(default_factory=dict)
    ADMIN_USERNAMES: Annotated[List[str], NoDecode] = Field(default_factory=list)

    @field_validator("CORS_ORIGINS", "ADMIN_USERNAMES", mode="before")
    @classmethod
    def _parse_list(cls, v: Union[str, List[str]]) -> List[str]:
        """Accept a JSON list or a comma-separated string."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [item.strip() for item in v.split(",") if item.strip()]
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()
