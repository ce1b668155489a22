"""
Measurement katas: tell apart states from a known, orthogonal set.

Each function may append gates to the circuit that prepared the state,
then measures once on the simulator.
"""

from typing import Optional, Sequence

from qiskit import QuantumCircuit

from .runtime import QubitLike, Simulator


def _measure(qc: QuantumCircuit, qubits: Sequence[QubitLike],
             simulator: Optional[Simulator]):
    return (simulator or Simulator()).sample(qc, qubits)


def is_qubit_one(qc: QuantumCircuit, q: QubitLike,
                 simulator: Optional[Simulator] = None) -> bool:
    """Return True if the qubit is in |1>, False if it is in |0>."""
    return _measure(qc, [q], simulator)[0] == 1


def is_qubit_plus(qc: QuantumCircuit, q: QubitLike,
                  simulator: Optional[Simulator] = None) -> bool:
    """Return True if the qubit is in |+>, False if it is in |->."""
    qc.h(q)
    return _measure(qc, [q], simulator)[0] == 0


def is_qubit_a(qc: QuantumCircuit, q: QubitLike, alpha: float,
               simulator: Optional[Simulator] = None) -> bool:
    """
    Distinguish |A> = cos(alpha)|0> + sin(alpha)|1> from
    |B> = -sin(alpha)|0> + cos(alpha)|1>.

    Returns:
        bool: True for |A>
    """
    # Rotating back by alpha maps |A> to |0> and |B> to |1>
    qc.ry(-2 * alpha, q)
    return _measure(qc, [q], simulator)[0] == 0


def zero_zero_or_one_one(qc: QuantumCircuit, qs: Sequence[QubitLike],
                         simulator: Optional[Simulator] = None) -> int:
    """Return 0 for |00> and 1 for |11>."""
    if len(qs) != 2:
        raise ValueError("Exactly 2 qubits are required")
    return _measure(qc, [qs[0]], simulator)[0]


def basis_state_measurement(qc: QuantumCircuit, qs: Sequence[QubitLike],
                            simulator: Optional[Simulator] = None) -> int:
    """Return 0, 1, 2 or 3 for |00>, |01>, |10>, |11>."""
    if len(qs) != 2:
        raise ValueError("Exactly 2 qubits are required")
    first, second = _measure(qc, qs, simulator)
    return 2 * first + second


def two_bitstrings_measurement(qc: QuantumCircuit, qs: Sequence[QubitLike],
                               bits1: Sequence[bool], bits2: Sequence[bool],
                               simulator: Optional[Simulator] = None) -> int:
    """
    Return 0 if the register is in |bits1> and 1 if it is in |bits2>.

    Only one qubit, where the two strings first differ, is measured.
    """
    if not len(qs) == len(bits1) == len(bits2):
        raise ValueError("Qubit register and bit strings must have the same length")
    for i, (b1, b2) in enumerate(zip(bits1, bits2)):
        if bool(b1) != bool(b2):
            outcome = _measure(qc, [qs[i]], simulator)[0]
            return 0 if outcome == int(bool(b1)) else 1
    raise ValueError("The two bit strings must differ")


def ghz_or_w(qc: QuantumCircuit, qs: Sequence[QubitLike],
             simulator: Optional[Simulator] = None) -> int:
    """
    Return 0 for the GHZ state and 1 for the W state.

    A W state always has exactly one qubit set; a GHZ state has none or all.
    """
    if len(qs) < 2:
        raise ValueError("At least 2 qubits are required")
    ones = sum(_measure(qc, qs, simulator))
    return 1 if ones == 1 else 0


def bell_state_measurement(qc: QuantumCircuit, qs: Sequence[QubitLike],
                           simulator: Optional[Simulator] = None) -> int:
    """
    Identify a Bell state, using the numbering of
    :func:`qkatas.superposition.all_bell_states`.
    """
    if len(qs) != 2:
        raise ValueError("Exactly 2 qubits are required")
    qc.cx(qs[0], qs[1])
    qc.h(qs[0])
    phase, parity = _measure(qc, qs, simulator)
    return 2 * parity + phase


def plus_minus_measurement(qc: QuantumCircuit, qs: Sequence[QubitLike],
                           simulator: Optional[Simulator] = None) -> int:
    """Return 0, 1, 2 or 3 for |++>, |+->, |-+>, |-->."""
    if len(qs) != 2:
        raise ValueError("Exactly 2 qubits are required")
    qc.h(qs[0])
    qc.h(qs[1])
    return basis_state_measurement(qc, qs, simulator)
