"""
Quantum Katas

Short quantum programming exercises on Qiskit: superposition, measurement,
oracles, Deutsch-Jozsa, Bernstein-Vazirani and Grover's search for SAT.
"""

from .config import DEFAULT_CONFIG, SimulatorConfig
from .runtime import Simulator, allocate_ancillas, evaluate_marking_oracle
from .sat_oracle import SATOracle, create_simple_3sat_example

__version__ = "1.0.0"
__author__ = "Quantum Katas Team"
__description__ = "Quantum programming katas on Qiskit"

__all__ = [
    "DEFAULT_CONFIG",
    "SATOracle",
    "Simulator",
    "SimulatorConfig",
    "allocate_ancillas",
    "create_simple_3sat_example",
    "evaluate_marking_oracle",
]
