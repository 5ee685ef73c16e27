"""Shared test fixtures for exifnamer."""

import shutil
import tempfile
from pathlib import Path

import pytest

# Abridged `exiftool IMG_1234.JPG` listing
SAMPLE_DUMP = """\
ExifTool Version Number         : 12.60
File Name                       : IMG_1234.JPG
Directory                       : .
File Size                       : 5.2 MB
Make                            : Canon
Camera Model Name               : Canon EOS 5D
Date/Time Original              : 2023:07:04 15:08:09
Create Date                     : 2023:07:04 15:08:09
Image Size                      : 4368x2912
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def sample_dump() -> str:
    """Return an exiftool listing for IMG_1234.JPG."""
    return SAMPLE_DUMP


@pytest.fixture
def sample_dump_file(temp_dir: Path) -> Path:
    """Write the sample listing to a file and return its path."""
    path = temp_dir / "IMG_1234.txt"
    path.write_text(SAMPLE_DUMP, encoding="utf-8")
    return path
