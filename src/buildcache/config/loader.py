import yaml
import logging
from pathlib import Path
from typing import Union

from .env_expand import expand_env
from .schema import AppConfig, StoreConfig
from .validate import validate_config
from ..store.hash_file_store import DefaultHashFileStore

logger = logging.getLogger(__name__)


def load_config(path: Union[str, Path]) -> AppConfig:
    with open(path, "r") as f:
        raw_text = f.read()

    expanded_text = expand_env(raw_text)
    data = yaml.safe_load(expanded_text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    config = AppConfig(**data)
    validate_config(config)
    logger.debug(f"Loaded config from {path}: store at {config.store.base_dir}")
    return config


def create_store(config: StoreConfig) -> DefaultHashFileStore:
    return DefaultHashFileStore(config.base_dir, race_policy=config.race_policy, fsync=config.fsync)
