"""Pytest configuration and fixtures."""
import random
import sys
from pathlib import Path

import pytest

# Ensure project root is on path when running pytest from anywhere
root = Path(__file__).resolve().parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from geoindex.monitoring.metrics import reset_metrics  # noqa: E402


@pytest.fixture
def random_points():
    """Deterministic spread of well-formed coordinates, with a few duplicates."""
    rng = random.Random(1234)
    points = [(rng.uniform(-90, 90), rng.uniform(-180, 180)) for _ in range(300)]
    points += points[:10]
    return points


@pytest.fixture(autouse=True)
def clean_metrics():
    reset_metrics()
    yield
    reset_metrics()
