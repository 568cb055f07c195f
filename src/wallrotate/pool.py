"""
File pool discovery.

Scans the configured directories for wallpaper candidates and returns the
working list the scheduler drains. A failing directory is logged and skipped,
it never aborts the scan.
"""

import fnmatch
import logging
import os
import random
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import RotationConfig
from .exceptions import ScanError

logger = logging.getLogger(__name__)


class FilePoolProvider:
    """
    Produce the working list of candidate files.

    Output order is the concatenation of each (path, pattern) scan, with
    directory entries visited in sorted name order. When shuffle is enabled
    the aggregated list is permuted with the injected random source.
    """

    def __init__(
        self,
        paths: Sequence[str],
        patterns: Sequence[str] = ("*",),
        recursive: bool = False,
        shuffle: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.paths = [Path(p).expanduser().absolute() for p in paths]
        self.patterns = list(patterns)
        self.recursive = recursive
        self.shuffle = shuffle
        self.rng = rng or random.Random()

    @classmethod
    def from_config(
        cls, config: RotationConfig, rng: Optional[random.Random] = None
    ) -> 'FilePoolProvider':
        """Create a provider from the rotation settings."""
        return cls(
            paths=config.paths,
            patterns=config.patterns,
            recursive=config.recursive,
            shuffle=config.shuffle,
            rng=rng,
        )

    def scan(self) -> List[str]:
        """
        Scan all configured paths for every pattern.

        Returns:
            List of absolute file paths, possibly empty
        """
        files: List[str] = []
        mode = "recursively" if self.recursive else "not recursively"

        for path in self.paths:
            for pattern in self.patterns:
                logger.info(f"Getting {pattern} from {path} {mode}")
                try:
                    files.extend(self._list_files(path, pattern))
                except ScanError as e:
                    logger.error(f"Error while getting files from {path}: {e}")

        logger.info(f"Found {len(files)} file(s).")

        if self.shuffle:
            logger.info("Randomizing files list.")
            self.rng.shuffle(files)

        return files

    def _list_files(self, root: Path, pattern: str) -> List[str]:
        """
        List files under root matching pattern.

        Results are collected before returning so a failure part-way
        through a walk contributes nothing for this path.

        Raises:
            ScanError: If root or any directory below it cannot be read
        """
        try:
            if self.recursive:
                return list(self._walk(root, pattern))
            return list(self._match_dir(root, pattern))
        except OSError as e:
            raise ScanError(f"{type(e).__name__}: {e}") from e

    def _match_dir(self, directory: Path, pattern: str) -> Iterable[str]:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
        for entry in entries:
            if entry.is_file() and fnmatch.fnmatch(entry.name, pattern):
                yield str(directory / entry.name)

    def _walk(self, root: Path, pattern: str) -> Iterable[str]:
        def raise_error(error: OSError) -> None:
            raise error

        # os.walk swallows errors unless onerror re-raises them
        for dirpath, dirnames, filenames in os.walk(root, onerror=raise_error):
            dirnames.sort()
            for name in sorted(fnmatch.filter(filenames, pattern)):
                path = Path(dirpath) / name
                if path.is_file():
                    yield str(path)
