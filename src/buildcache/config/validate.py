from .schema import AppConfig


def validate_config(config: AppConfig):
    base_dir = config.store.base_dir
    if base_dir.exists() and not base_dir.is_dir():
        raise ValueError(f"Store base_dir {base_dir} exists and is not a directory")
