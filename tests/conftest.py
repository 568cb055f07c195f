"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pytest

from wallrotate.config import Config, RotationConfig


class RecordingSetter:
    """Wallpaper setter double that records calls and can fail per monitor."""

    def __init__(self, fail_on: Sequence[str] = ()) -> None:
        self.calls: List[tuple] = []
        self.fail_on = set(fail_on)

    def set(self, monitor_id: str, image_path: str, index: int = 0) -> None:
        self.calls.append((monitor_id, image_path))
        if monitor_id in self.fail_on:
            raise OSError(f"cannot set wallpaper on {monitor_id}")


class ListProvider:
    """Pool provider double returning copies of a fixed list."""

    def __init__(self, files: Sequence[str]) -> None:
        self.files = list(files)
        self.scans = 0

    def scan(self) -> List[str]:
        self.scans += 1
        return list(self.files)


@pytest.fixture
def image_tree(tmp_path: Path) -> Path:
    """
    Create a wallpaper directory tree:

    images/
        a.jpg, b.jpg, c.png, notes.txt
        nested/
            d.jpg
            deeper/e.png
    """
    root = tmp_path / "images"
    (root / "nested" / "deeper").mkdir(parents=True)
    for name in ("a.jpg", "b.jpg", "c.png", "notes.txt"):
        (root / name).write_bytes(b"x")
    (root / "nested" / "d.jpg").write_bytes(b"x")
    (root / "nested" / "deeper" / "e.png").write_bytes(b"x")
    return root


@pytest.fixture
def recording_setter() -> RecordingSetter:
    return RecordingSetter()


@pytest.fixture
def make_setter() -> Callable[..., RecordingSetter]:
    return RecordingSetter


@pytest.fixture
def make_provider() -> Callable[..., ListProvider]:
    return ListProvider


@pytest.fixture
def make_rotation_config() -> Callable[..., RotationConfig]:
    """Factory for RotationConfig with test-friendly defaults."""
    def factory(paths: Optional[Sequence[str]] = None, **kwargs) -> RotationConfig:
        kwargs.setdefault("interval", 1)
        return RotationConfig(paths=tuple(paths or ("/images",)), **kwargs)
    return factory


@pytest.fixture
def config_file(tmp_path: Path, image_tree: Path) -> Path:
    """Write a valid config.toml pointing at the image tree."""
    path = tmp_path / "config.toml"
    path.write_text(f"""
[rotation]
interval = 60
paths = ["{image_tree.as_posix()}"]
recursive = false
pattern = "*.jpg;*.png"
shuffle = false

[wallpaper]
command = "swww"
monitors = ["DP-1", "HDMI-A-1"]

[logging]
level = "INFO"
""")
    return path


@pytest.fixture
def test_config(config_file: Path) -> Config:
    """Load the test config with an empty environment."""
    return Config.load(config_file=config_file, environ={})
