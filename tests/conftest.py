from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """A config directory with a JSON, a YAML and a Python file."""
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "a.py").write_text(
        "import os\n"
        "name = 'My App'\n"
        "db = {'host': 'localhost', 'port': 5432}\n"
        "_private = 1\n"
        "def helper():\n"
        "    return 1\n"
    )
    (directory / "b.json").write_text(
        json.dumps({"db": {"user": "admin"}, "features": ["a", "b"]})
    )
    (directory / "c.yaml").write_text("logging:\n  level: info\n")
    (directory / "notes.txt").write_text("not config")
    return directory
