"""Shared fixtures for engine tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(20240917)


@pytest.fixture
def prices(rng):
    """Random-walk close prices."""
    steps = rng.normal(0.0, 1.0, size=500)
    return 100.0 + np.cumsum(steps)


@pytest.fixture
def gappy_prices(prices):
    """Close prices with NaN, None-like gaps and infinities sprinkled in."""
    values = prices.copy()
    values[[3, 4, 50, 51, 52, 200]] = np.nan
    values[[10, 300]] = np.inf
    values[[120]] = -np.inf
    return values


@pytest.fixture
def config_file(tmp_path):
    """Write a small config.yml and return its path."""
    path = tmp_path / "config.yml"
    path.write_text(
        "engine:\n"
        "  chunk_size: 64\n"
        "  overlap: 8\n"
        "  chunk_threshold: 100\n"
        "  memory_limit_mb: 50\n"
        "logging:\n"
        "  version: 1\n"
        "  disable_existing_loggers: false\n"
        "  handlers:\n"
        "    console:\n"
        "      class: logging.StreamHandler\n"
        "      level: DEBUG\n"
        "  root:\n"
        "    level: INFO\n"
        "    handlers: [console]\n"
    )
    return path
