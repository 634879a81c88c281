import sys
import os

import pytest

# Add src/ to sys.path so absolute imports (core.*, ini_format.*, etc.) work.
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(_project_root, "src"))
sys.path.insert(0, _project_root)

from infrastructure.file_locks import FileLockRegistry  # noqa: E402


SAMPLE_INI = """\
; window settings
[Window]
Title="My App"
Width=800

# network settings
[Network]
Host = example.com
Port=8080
"""


@pytest.fixture()
def registry() -> FileLockRegistry:
    """A private lock registry so tests never share state."""
    return FileLockRegistry()


@pytest.fixture()
def sample_ini(tmp_path):
    """Write SAMPLE_INI as UTF-8 and return its path."""
    path = tmp_path / "sample.ini"
    path.write_text(SAMPLE_INI, encoding="utf-8")
    return path
