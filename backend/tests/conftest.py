"""Pytest configuration and fixtures."""
import os
import sys
from pathlib import Path

import pytest

# Ensure backend root is on path when running pytest from repo root or backend
backend = Path(__file__).resolve().parent.parent
if str(backend) not in sys.path:
    sys.path.insert(0, str(backend))

# Credentials must be in the environment before main builds its settings
os.environ.setdefault("ADMIN_USER", "durga_prasad")
os.environ.setdefault("ADMIN_PASSWORD", "Password123")

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixture_path():
    def _path(name: str) -> Path:
        return FIXTURES / name
    return _path


@pytest.fixture
def office():
    from src.geofilter import ReferencePoint
    return ReferencePoint(latitude=19.0590317, longitude=72.7553452, radius_km=100.0)
