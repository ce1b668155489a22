"""
Deutsch, Deutsch-Jozsa and Bernstein-Vazirani drivers.

Each quantum driver asks the oracle a single question in superposition;
the classical baselines show how many evaluations the same task needs
without it.
"""

from typing import List, Optional, Tuple

from qiskit import QuantumCircuit, QuantumRegister

from .logging_config import get_logger
from .runtime import MarkingOracle, Simulator, evaluate_marking_oracle

logger = get_logger(__name__)


def _require_inputs(n: int):
    if n < 1:
        raise ValueError(f"Number of input qubits must be positive, got {n}")


def _query_circuit(n: int, oracle: MarkingOracle) -> Tuple[QuantumCircuit, QuantumRegister]:
    """
    H^n on the inputs, target in |->, one oracle call, H^n on the inputs.

    The phase kickback leaves the input register in H^n (-1)^f(x) |+...+>.
    """
    _require_inputs(n)
    x = QuantumRegister(n, 'x')
    y = QuantumRegister(1, 'y')
    qc = QuantumCircuit(x, y)

    qc.x(y)
    qc.h(y)
    qc.h(x)
    oracle(qc, list(x), y[0])
    qc.h(x)
    return qc, x


def deutsch_jozsa(n: int, oracle: MarkingOracle,
                  simulator: Optional[Simulator] = None) -> bool:
    """
    Decide whether a function promised to be constant or balanced is constant.

    Args:
        n: Number of input bits of f
        oracle: Marking oracle for f
        simulator: Simulator to sample on

    Returns:
        bool: True if f is constant
    """
    qc, x = _query_circuit(n, oracle)
    bits = (simulator or Simulator()).sample(qc, list(x))
    logger.debug("Deutsch-Jozsa measured %s", bits)
    return not any(bits)


def deutsch(oracle: MarkingOracle, simulator: Optional[Simulator] = None) -> bool:
    """Deutsch's algorithm: True if the single-bit function f is constant."""
    return deutsch_jozsa(1, oracle, simulator)


def bernstein_vazirani(n: int, oracle: MarkingOracle,
                       simulator: Optional[Simulator] = None) -> List[int]:
    """
    Recover r from an oracle for f(x) = r.x mod 2.

    Args:
        n: Number of input bits of f
        oracle: Marking oracle for f
        simulator: Simulator to sample on

    Returns:
        List[int]: The bits of r
    """
    qc, x = _query_circuit(n, oracle)
    bits = (simulator or Simulator()).sample(qc, list(x))
    logger.debug("Bernstein-Vazirani measured %s", bits)
    return bits


def _int_to_bits(value: int, n: int) -> List[int]:
    return [(value >> k) & 1 for k in range(n)]


def deutsch_jozsa_classical(n: int, oracle: MarkingOracle) -> bool:
    """
    Classical Deutsch-Jozsa: needs up to 2^(n-1) + 1 evaluations of f.
    """
    _require_inputs(n)
    first = evaluate_marking_oracle(n, oracle, _int_to_bits(0, n))
    for value in range(1, 2 ** (n - 1) + 1):
        if evaluate_marking_oracle(n, oracle, _int_to_bits(value, n)) != first:
            logger.debug("Classical Deutsch-Jozsa: balanced after %d queries", value + 1)
            return False
    return True


def bernstein_vazirani_classical(n: int, oracle: MarkingOracle) -> List[int]:
    """Classical Bernstein-Vazirani: r_i = f(e_i), n evaluations."""
    _require_inputs(n)
    return [int(evaluate_marking_oracle(n, oracle, _int_to_bits(1 << i, n)))
            for i in range(n)]
