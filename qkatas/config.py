"""
Configuration for the simulator that runs the katas.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class SimulatorConfig:
    """Configuration for sampled runs on the Aer simulator."""

    # Aer simulation method
    method: str = "statevector"

    # Seed for every sampled shot and for randomized search schedules
    seed: Optional[int] = None

    # Passed to qiskit.transpile before each run
    optimization_level: int = 0

    # Upper bound on candidate measurements in universal Grover search
    max_grover_attempts: int = 50


# Default configuration instance
DEFAULT_CONFIG = SimulatorConfig()
