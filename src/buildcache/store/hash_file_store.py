import abc
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from ..hashing.hash_code import HashCode
from ..utils.atomic import fsync_file, publish_exclusive, publish_replace, staging_file
from .errors import FillError, InitializationError
from .paths import entry_path

logger = logging.getLogger(__name__)

FillAction = Callable[[Path], None]


class RacePolicy(str, Enum):
    """Decides which content survives when two puts for one key race."""

    FIRST_WRITER_WINS = "first_writer_wins"
    LAST_RENAME_WINS = "last_rename_wins"


class HashFileStore(abc.ABC):
    """File store that is indexed by HashCode."""

    @abc.abstractmethod
    def put(self, key: HashCode, fill: FillAction) -> Path:
        """Puts an entry into the store, using `fill` to produce the file."""

    @abc.abstractmethod
    def get(self, key: HashCode) -> Optional[Path]:
        """Returns the entry's path, or None if there is no entry for `key`."""


class DefaultHashFileStore(HashFileStore):
    def __init__(
        self,
        base_dir: Union[str, Path],
        race_policy: RacePolicy = RacePolicy.FIRST_WRITER_WINS,
        fsync: bool = True,
    ):
        self._base_dir = Path(base_dir).resolve()
        self.race_policy = RacePolicy(race_policy)
        self.fsync = fsync
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InitializationError(f"Cannot create store directory {self._base_dir}: {e}") from e
        if not self._base_dir.is_dir():
            raise InitializationError(f"Store path {self._base_dir} is not a directory")

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def entry_path(self, key: HashCode) -> Path:
        return entry_path(self._base_dir, key)

    def get(self, key: HashCode) -> Optional[Path]:
        path = self.entry_path(key)
        try:
            path.stat()
        except FileNotFoundError:
            return None
        return path

    def contains(self, key: HashCode) -> bool:
        return self.get(key) is not None

    def put(self, key: HashCode, fill: FillAction) -> Path:
        destination = self.entry_path(key)
        if self.get(key) is not None:
            logger.debug(f"Entry {key} already exists, skipping fill.")
            return destination

        with staging_file(self._base_dir) as tmp_path:
            try:
                fill(tmp_path)
            except OSError as e:
                logger.error(f"Fill for entry {key} failed: {e}")
                raise
            except Exception as e:
                logger.error(f"Fill for entry {key} failed: {e}")
                raise FillError(f"Failed to produce entry {key}: {e}", key=key) from e

            if self.fsync:
                fsync_file(tmp_path)

            try:
                published = self._publish(tmp_path, destination)
            except OSError as e:
                logger.error(f"Failed to publish entry {key}: {e}")
                raise

        if published:
            logger.debug(f"Stored new entry: {key}")
        else:
            logger.info(f"Entry {key} was published concurrently, discarded our copy.")
        return destination

    def _publish(self, tmp_path: Path, destination: Path) -> bool:
        if self.race_policy is RacePolicy.LAST_RENAME_WINS:
            publish_replace(tmp_path, destination)
            return True
        return publish_exclusive(tmp_path, destination)

    def __repr__(self) -> str:
        return f"DefaultHashFileStore({str(self._base_dir)!r}, race_policy={self.race_policy.value!r})"
