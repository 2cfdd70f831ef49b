"""Настройки приложения из переменных окружения ``FIBONACCI_*`` (и ``.env``)."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from backend.service.fibonacci_service import DEFAULT_MAX_POSITION


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FIBONACCI_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    storage_path: str = Field(
        default=os.path.join("backend", "storage"),
        description="Каталог для файлов с последовательностями",
    )
    sequence_file: str = Field(default="fibonacci.txt", description="Имя основного файла")
    unique_file_names: bool = Field(
        default=False, description="Отдельный файл на каждое сохранение"
    )
    max_position: Optional[int] = Field(
        default=DEFAULT_MAX_POSITION,
        ge=1,
        description="Граница позиций для findNumber/findRatio ('none' снимает границу)",
    )
    log_level: str = Field(default="INFO", description="Уровень логирования")
    cors_allow_origins: Annotated[List[str], NoDecode] = Field(
        default=["*"], description="CORS origins (через запятую)"
    )

    @field_validator("max_position", mode="before")
    @classmethod
    def parse_max_position(cls, v):
        if isinstance(v, str) and v.strip().lower() == "none":
            return None
        return v

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def parse_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Кэшированные настройки; используется как FastAPI-зависимость."""
    return Settings()
