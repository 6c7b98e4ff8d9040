"""Shared pytest fixtures for antwalk tests."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml

from antwalk.core.logging import Logger, LogLevel, set_global_logger
from antwalk.walker.visitors import CollectingVisitor


class ListHandler(logging.Handler):
    """Logging handler that keeps records in memory."""

    def __init__(self):
        super().__init__()
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def messages(self, level: int = logging.NOTSET) -> List[str]:
        return [r.getMessage() for r in self.records if r.levelno >= level]


@pytest.fixture
def log_handler() -> ListHandler:
    return ListHandler()


@pytest.fixture
def logger(log_handler: ListHandler) -> Logger:
    """Debug-level logger writing only to `log_handler`."""
    return Logger(name="antwalk.test", level=LogLevel.DEBUG, handlers=[log_handler])


@pytest.fixture
def visitor() -> CollectingVisitor:
    return CollectingVisitor()


def make_tree(root: Path, files: List[str], dirs: List[str] = ()) -> Path:
    """Create `files` (with parents) and extra empty `dirs` below `root`."""
    root.mkdir(parents=True, exist_ok=True)
    for name in dirs:
        (root / name).mkdir(parents=True, exist_ok=True)
    for name in files:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"content of {name}")
    return root


@pytest.fixture
def tree_factory(tmp_path: Path):
    """Build a named tree below tmp_path: tree_factory("name", files, dirs)."""

    def factory(name: str, files: List[str], dirs: List[str] = ()) -> Path:
        return make_tree(tmp_path / name, files, dirs)

    return factory


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Small build-style project tree."""
    return make_tree(
        tmp_path / "project",
        [
            "src/main/Foo.java",
            "src/test/FooTest.java",
            "build/out.class",
        ],
    )


@pytest.fixture
def level_tree(tmp_path: Path) -> Path:
    """Root with files f1, f2 and directories d1 (holding f3) and d2."""
    return make_tree(tmp_path / "levels", ["f1", "f2", "d1/f3"], dirs=["d2"])


@pytest.fixture
def deep_tree(tmp_path: Path) -> Path:
    """Three levels with a file and a directory on each level."""
    return make_tree(
        tmp_path / "deep",
        [
            "a.txt",
            "one/b.txt",
            "one/two/c.txt",
            "one/two/three/d.txt",
            "other/e.txt",
        ],
    )


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample antwalk configuration."""
    return {
        "root": "project",
        "selection": {
            "includes": ["src/**"],
            "excludes": ["**/test/**"],
            "case_sensitive": True,
            "follow_symlinks": True,
        },
        "output": {
            "format": "{{ kind }}:{{ relative_path }}",
            "include_dirs": True,
        },
        "logging": {
            "level": "DEBUG",
            "file": None,
        },
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Write `sample_config` as YAML."""
    config_path = tmp_path / "antwalk.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep ANTWALK_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("ANTWALK_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the shared logger between tests."""
    yield
    set_global_logger(None)
