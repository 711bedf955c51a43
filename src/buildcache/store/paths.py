import os
from pathlib import Path

# Base directory for the store when none is configured.
# Can be overridden by env var BUILDCACHE_DIR
DEFAULT_STORE_DIRNAME = "build-cache"


def default_store_dir() -> Path:
    env = os.getenv("BUILDCACHE_DIR")
    if env:
        return Path(env).resolve()
    return Path(DEFAULT_STORE_DIRNAME).resolve()


def entry_path(base_dir: Path, key) -> Path:
    """Canonical location of the entry for `key` under `base_dir`."""
    return base_dir / str(key)
