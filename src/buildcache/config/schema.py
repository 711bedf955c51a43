from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from ..store.hash_file_store import RacePolicy
from ..logging_conf import resolve_log_level
from ..store.paths import default_store_dir


class StoreConfig(BaseModel):
    base_dir: Path = Field(default_factory=default_store_dir)
    race_policy: RacePolicy = RacePolicy.FIRST_WRITER_WINS
    fsync: bool = True

    @field_validator("base_dir", mode="before")
    @classmethod
    def validate_base_dir(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Store base_dir must not be empty")
        return v


class AppConfig(BaseModel):
    store: StoreConfig = Field(default_factory=StoreConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        resolve_log_level(v)
        return v.strip().upper()
