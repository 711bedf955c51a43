import os
import re

_PATTERN = re.compile(r"\$\{([A-Za-z0-9_]+)(?::-([^}]*))?\}")


def expand_env(text: str) -> str:
    """Replaces ${VAR} and ${VAR:-default} with values from the environment."""
    return _PATTERN.sub(lambda m: os.getenv(m.group(1)) or (m.group(2) or ""), text)
