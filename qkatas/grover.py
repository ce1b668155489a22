"""
Grover's search built from marking oracles.
"""

import math
from functools import partial
from typing import List, Optional, Sequence, Tuple

import numpy as np
from qiskit import ClassicalRegister, QuantumCircuit, QuantumRegister

from .logging_config import get_logger
from .runtime import (MarkingOracle, PhaseOracle, QubitLike, Simulator,
                      allocate_ancillas, evaluate_marking_oracle)
from .sat import SATProblem, oracle_exactly_one_3sat, oracle_sat, validate_problem

logger = get_logger(__name__)

# Growth factor of the iteration bound when the number of solutions is unknown
SCHEDULE_GROWTH = 6 / 5


def to_phase_oracle(marking_oracle: MarkingOracle) -> PhaseOracle:
    """
    Turn a marking oracle into a phase oracle via phase kickback.

    The returned oracle borrows one scratch qubit, puts it in |->, runs the
    marking oracle with it as target and returns it to |0>.
    """
    def phase_oracle(qc: QuantumCircuit, x: Sequence[QubitLike]):
        target = allocate_ancillas(qc, 1, "phase", exclude=x)[0]
        qc.x(target)
        qc.h(target)
        marking_oracle(qc, x, target)
        qc.h(target)
        qc.x(target)

    return phase_oracle


def conditional_phase_flip(qc: QuantumCircuit, register: Sequence[QubitLike]):
    """
    Apply 2|0...0><0...0| - I: every basis state except |0...0> gets a -1.
    """
    qubits = list(register)
    if not qubits:
        raise ValueError("Register must not be empty")
    qc.x(qubits)
    if len(qubits) == 1:
        qc.z(qubits[0])
    else:
        qc.h(qubits[-1])
        qc.mcx(qubits[:-1], qubits[-1])
        qc.h(qubits[-1])
    qc.x(qubits)
    # The gates above flip |0...0> instead; the global -1 turns that around
    qc.global_phase += np.pi


def grover_iteration(qc: QuantumCircuit, register: Sequence[QubitLike],
                     phase_oracle: PhaseOracle):
    """One oracle call followed by the reflection about the mean."""
    qubits = list(register)
    phase_oracle(qc, qubits)
    qc.h(qubits)
    conditional_phase_flip(qc, qubits)
    qc.h(qubits)


def optimal_iterations(n: int, num_solutions: int = 1) -> int:
    """
    Number of Grover iterations for n qubits and a known number of solutions.

    Returns:
        int: floor(pi/4 * sqrt(N/M))
    """
    if num_solutions < 1:
        raise ValueError("At least one solution is required")
    N = 2 ** n
    if num_solutions > N:
        raise ValueError(f"{num_solutions} solutions exceed the search space of {N}")
    return int(np.pi / 4 * np.sqrt(N / num_solutions))


def _grover_circuit(n: int, marking_oracle: MarkingOracle,
                    iterations: int) -> Tuple[QuantumCircuit, QuantumRegister]:
    if n < 1:
        raise ValueError(f"Number of qubits must be positive, got {n}")
    if iterations < 0:
        raise ValueError(f"Number of iterations must not be negative, got {iterations}")
    qreg = QuantumRegister(n, 'q')
    qc = QuantumCircuit(qreg)

    # Initial superposition
    qc.h(qreg)

    phase_oracle = to_phase_oracle(marking_oracle)
    for _ in range(iterations):
        grover_iteration(qc, qreg, phase_oracle)
    return qc, qreg


def build_grover_circuit(n: int, marking_oracle: MarkingOracle,
                         iterations: Optional[int] = None,
                         measure: bool = True) -> QuantumCircuit:
    """
    Create a complete Grover circuit.

    Args:
        n: Number of input qubits
        marking_oracle: Oracle marking the solutions
        iterations: Number of Grover iterations (auto-calculated for one
            solution if None)
        measure: Append measurements of the input register

    Returns:
        QuantumCircuit: Grover circuit
    """
    if iterations is None:
        iterations = optimal_iterations(n)
    qc, qreg = _grover_circuit(n, marking_oracle, iterations)
    if measure:
        creg = ClassicalRegister(n, 'c')
        qc.add_register(creg)
        qc.measure(qreg, creg)
    return qc


def grover_search(n: int, marking_oracle: MarkingOracle, iterations: Optional[int] = None,
                  simulator: Optional[Simulator] = None) -> List[int]:
    """
    Run Grover's search with a fixed number of iterations and measure once.

    Returns:
        List[int]: Measured input bits (a candidate solution)
    """
    if iterations is None:
        iterations = optimal_iterations(n)
    qc, qreg = _grover_circuit(n, marking_oracle, iterations)
    bits = (simulator or Simulator()).sample(qc, list(qreg))
    logger.debug("Grover search with %d iteration(s) measured %s", iterations, bits)
    return bits


def universal_grover(n: int, marking_oracle: MarkingOracle,
                     simulator: Optional[Simulator] = None,
                     max_attempts: Optional[int] = None) -> Optional[List[int]]:
    """
    Grover's search for an unknown number of solutions.

    Follows Boyer, Brassard, Hoyer and Tapp: the iteration count is drawn
    uniformly below a bound that grows by SCHEDULE_GROWTH after every miss,
    capped at sqrt(N). Each candidate is checked with the marking oracle.

    Args:
        n: Number of input qubits
        marking_oracle: Oracle marking the solutions
        simulator: Simulator to sample on
        max_attempts: Maximum number of measured candidates (defaults to
            the simulator config)

    Returns:
        A solution, or None if none was found in ``max_attempts`` tries
    """
    simulator = simulator or Simulator()
    if max_attempts is None:
        max_attempts = simulator.config.max_grover_attempts

    bound = 1.0
    cap = math.sqrt(2 ** n)
    for attempt in range(1, max_attempts + 1):
        iterations = simulator.random_int(math.ceil(bound))
        candidate = grover_search(n, marking_oracle, iterations, simulator)
        if evaluate_marking_oracle(n, marking_oracle, candidate):
            logger.info("Found solution %s on attempt %d (%d iteration(s))",
                        candidate, attempt, iterations)
            return candidate
        bound = min(bound * SCHEDULE_GROWTH, cap)

    logger.warning("No solution found after %d attempts", max_attempts)
    return None


def solve_sat_with_grover(num_variables: int, problem: SATProblem,
                          simulator: Optional[Simulator] = None,
                          max_attempts: Optional[int] = None,
                          exactly_one: bool = False) -> Optional[List[bool]]:
    """
    Find a satisfying assignment of a SAT instance with universal Grover search.

    Args:
        num_variables: Number of variables of the instance
        problem: Clauses as lists of (variable_index, polarity)
        simulator: Simulator to sample on
        max_attempts: Maximum number of measured candidates
        exactly_one: Treat clauses as exactly-1 3-SAT constraints

    Returns:
        The assignment as booleans, or None if none was found
    """
    validate_problem(problem, num_variables)
    oracle = oracle_exactly_one_3sat if exactly_one else oracle_sat
    logger.info("Solving %d-variable instance with %d clause(s) using Grover",
                num_variables, len(problem))
    bits = universal_grover(num_variables, partial(oracle, problem=problem),
                            simulator, max_attempts)
    if bits is None:
        return None
    return [bool(bit) for bit in bits]
