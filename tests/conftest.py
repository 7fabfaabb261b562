import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_app(tmp_path):
    """A writable copy of the sample JS project."""
    target = tmp_path / "sample_app"
    shutil.copytree(FIXTURES / "sample_app", target)
    return target
