import sys
from pathlib import Path

import pytest

# Ensure 'src' directory is on sys.path for tests
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_DIR = PROJECT_ROOT / 'src'
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


SCENARIO_TEXT = "[Server]\nPort=8080\n# note\n[Flags]\nverbose\nquiet\n"


@pytest.fixture
def write_ini(tmp_path: Path):
    """Return a helper writing *text* to an INI file under ``tmp_path``."""

    def _write(text: str, name: str = "settings.ini") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def scenario_schema():
    from pykeyconf import Configuration, KeySchema

    return Configuration(
        KeySchema("Server").field("Port", int).build(),
        KeySchema("Flags", default_value_name="values")
        .field("values", str, is_name_visible=False)
        .build(),
    )
