"""Global pytest configuration for the faultline test suite.

The module ensures the ``src`` tree is importable regardless of how the
repository is cloned, and gives every test a clean episode registry and the
default engine configuration.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path so imports work without installing
project_root = Path(__file__).parent.parent
src_dir = project_root / 'src'

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from faultline import FaultlineConfig, get_registry, set_config  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_engine_state(monkeypatch: pytest.MonkeyPatch):
    """Reset the calling context's registry and install default configuration."""

    for name in ("FAULTLINE_DEBUG_CHECKS", "FAULTLINE_DIAGNOSTIC_MAX_LENGTH", "FAULTLINE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    set_config(FaultlineConfig())
    get_registry().reset()
    yield
    get_registry().reset()
    set_config(None)


@pytest.fixture
def debug_checks() -> None:
    """Enable fail-fast structural checks for the duration of a test."""

    set_config(FaultlineConfig(debug_checks=True))
