"""
Library configuration loaded from environment variables.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised vecstore settings."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    embedding_model_name: str = Field(default="text-embedding-3-small", alias="EMBEDDING_MODEL_NAME")
    embedding_batch_size: int = Field(default=64, gt=0, alias="EMBEDDING_BATCH_SIZE")

    vector_store_backend: str = Field(default="lancedb", alias="VECTOR_STORE_BACKEND")
    vector_store_uri: str = Field(default="./tmp/tmp_lancedb", alias="VECTOR_STORE_URI")
    vector_store_table: str = Field(default="documents", alias="VECTOR_STORE_TABLE")
    vector_dimensions: int = Field(default=1536, alias="VECTOR_DIMENSIONS")


settings = Settings()


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure base logging for scripts and embedding applications.
    """
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
    return logging.getLogger("vecstore")


def public_settings(current: Settings | None = None) -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return (current or settings).model_dump(
        exclude={"openai_api_key"},
        exclude_none=True,
    )


__all__ = ["Settings", "settings", "setup_logging", "public_settings"]
