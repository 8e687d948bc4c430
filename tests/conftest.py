"""Common test fixtures."""

import os
from pathlib import Path
from typing import List

import pytest

from dirtree.config import reset_config_cache
from dirtree.services.directory_service import DirectoryTree


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch) -> Path:
    # Patch HOME environment variable for the duration of the test
    monkeypatch.setenv("HOME", str(tmp_path))
    # On Windows, also set USERPROFILE
    if os.name == "nt":
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
    monkeypatch.setenv("DIRTREE_CONFIG_DIR", str(tmp_path / ".dirtree"))
    monkeypatch.setenv("DIRTREE_ENV", "test")
    reset_config_cache()
    yield tmp_path
    reset_config_cache()


@pytest.fixture
def output() -> List[str]:
    return []


@pytest.fixture
def errors() -> List[str]:
    return []


@pytest.fixture
def tree(output, errors) -> DirectoryTree:
    """Empty-rooted tree writing into the output and errors lists."""
    return DirectoryTree(out=output.append, err=errors.append)


@pytest.fixture
def produce_tree(tree: DirectoryTree) -> DirectoryTree:
    """Tree with a small produce hierarchy.

    fruits
      apples
        fuji
    grains
    vegetables
    """
    for path in ["fruits", "vegetables", "grains", "fruits/apples", "fruits/apples/fuji"]:
        tree.create(path)
    return tree

