"""
pytest configuration for diagerrors tests.

Adds src directory to Python path for imports and resets process-wide state
between tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from diagerrors.config import DiagnosticsConfig, configure  # noqa: E402
from diagerrors.logging.context import clear_log_context  # noqa: E402


@pytest.fixture(autouse=True)
def reset_diagnostics_state():
    """Restore default configuration and empty log context around each test."""
    configure(DiagnosticsConfig())
    clear_log_context()
    yield
    configure(DiagnosticsConfig())
    clear_log_context()
