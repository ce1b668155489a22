"""
Shared fixtures for the kata tests.
"""

import pytest

from qkatas.config import SimulatorConfig
from qkatas.runtime import Simulator


@pytest.fixture
def simulator():
    """Seeded simulator so sampled runs are reproducible."""
    return Simulator(SimulatorConfig(seed=1234))
