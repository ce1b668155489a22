"""
State preparation katas.

Every operation starts from qubits in |0...0> and prepares the named state.
Registers are read big-endian: |01> means qs[0] = 0 and qs[1] = 1.
"""

from typing import Sequence

import numpy as np
from qiskit import QuantumCircuit

from .runtime import QubitLike


def _require_qubits(qs: Sequence[QubitLike], count: int = 1):
    if len(qs) < count:
        raise ValueError(f"At least {count} qubit(s) required, got {len(qs)}")


def plus_state(qc: QuantumCircuit, q: QubitLike):
    """|0> -> |+> = (|0> + |1>) / sqrt(2)."""
    qc.h(q)


def minus_state(qc: QuantumCircuit, q: QubitLike):
    """|0> -> |-> = (|0> - |1>) / sqrt(2)."""
    qc.x(q)
    qc.h(q)


def unequal_superposition(qc: QuantumCircuit, q: QubitLike, alpha: float):
    """|0> -> cos(alpha) |0> + sin(alpha) |1>."""
    qc.ry(2 * alpha, q)


def all_basis_vectors_superposition(qc: QuantumCircuit, qs: Sequence[QubitLike]):
    """Equal superposition of all 2^N basis vectors."""
    _require_qubits(qs)
    for q in qs:
        qc.h(q)


def all_basis_vectors_with_phases(qc: QuantumCircuit, qs: Sequence[QubitLike]):
    """
    Prepare (|00> + i|01> - |10> - i|11>) / 2.

    The state factors as |-> on qs[0] and (|0> + i|1>) / sqrt(2) on qs[1].
    """
    if len(qs) != 2:
        raise ValueError("Exactly 2 qubits are required")
    minus_state(qc, qs[0])
    qc.h(qs[1])
    qc.s(qs[1])


def bell_state(qc: QuantumCircuit, qs: Sequence[QubitLike]):
    """|00> -> (|00> + |11>) / sqrt(2)."""
    all_bell_states(qc, qs, 0)


def all_bell_states(qc: QuantumCircuit, qs: Sequence[QubitLike], index: int):
    """
    Prepare one of the four Bell states.

    Args:
        qc: Circuit to append to
        qs: Two qubits in |00>
        index: 0 -> (|00> + |11>), 1 -> (|00> - |11>),
            2 -> (|01> + |10>), 3 -> (|01> - |10>), all over sqrt(2)
    """
    if len(qs) != 2:
        raise ValueError("Exactly 2 qubits are required")
    if index not in range(4):
        raise ValueError(f"Bell state index must be in 0..3, got {index}")
    qc.h(qs[0])
    # Low bit selects the relative phase, high bit the parity
    if index % 2 == 1:
        qc.z(qs[0])
    if index // 2 == 1:
        qc.x(qs[1])
    qc.cx(qs[0], qs[1])


def ghz_state(qc: QuantumCircuit, qs: Sequence[QubitLike]):
    """|0...0> -> (|0...0> + |1...1>) / sqrt(2)."""
    _require_qubits(qs)
    qc.h(qs[0])
    for q in qs[1:]:
        qc.cx(qs[0], q)


def zero_and_bitstring(qc: QuantumCircuit, qs: Sequence[QubitLike], bits: Sequence[bool]):
    """
    Prepare (|0...0> + |bits>) / sqrt(2).

    Args:
        qc: Circuit to append to
        qs: N qubits in |0...0>
        bits: N classical bits, bits[0] must be set
    """
    if len(qs) != len(bits):
        raise ValueError(f"Got {len(qs)} qubits but {len(bits)} bits")
    _require_qubits(qs)
    if not bits[0]:
        raise ValueError("The first bit of the bit string must be set")
    qc.h(qs[0])
    for q, bit in zip(qs[1:], bits[1:]):
        if bit:
            qc.cx(qs[0], q)


def two_bitstrings(qc: QuantumCircuit, qs: Sequence[QubitLike],
                   bits1: Sequence[bool], bits2: Sequence[bool]):
    """
    Prepare (|bits1> + |bits2>) / sqrt(2).

    Args:
        qc: Circuit to append to
        qs: N qubits in |0...0>
        bits1: First basis state
        bits2: Second basis state, different from the first
    """
    if not len(qs) == len(bits1) == len(bits2):
        raise ValueError("Qubit register and bit strings must have the same length")
    diff = [i for i in range(len(qs)) if bool(bits1[i]) != bool(bits2[i])]
    if not diff:
        raise ValueError("The two bit strings must differ")

    first = diff[0]
    # The branch with qs[first] = 0 carries the string that has a 0 there
    zero_branch, one_branch = (bits2, bits1) if bits1[first] else (bits1, bits2)
    qc.h(qs[first])
    for i, q in enumerate(qs):
        if i == first:
            continue
        if bool(zero_branch[i]) != bool(one_branch[i]):
            qc.cx(qs[first], q)
        if zero_branch[i]:
            qc.x(q)


def parity_superposition(qc: QuantumCircuit, qs: Sequence[QubitLike], parity: int):
    """Equal superposition of the basis states whose number of ones is ``parity`` mod 2."""
    _require_qubits(qs)
    if parity not in (0, 1):
        raise ValueError(f"Parity must be 0 or 1, got {parity}")
    for q in qs[:-1]:
        qc.h(q)
        qc.cx(q, qs[-1])
    if parity:
        qc.x(qs[-1])


def w_state(qc: QuantumCircuit, qs: Sequence[QubitLike]):
    """
    Prepare the W state (|10...0> + |010...0> + ... + |0...01>) / sqrt(N).

    The excitation starts on qs[0]; at step k it stays there with
    probability 1/(N-k) and otherwise moves to qs[k+1].
    """
    _require_qubits(qs)
    n = len(qs)
    qc.x(qs[0])
    for k in range(n - 1):
        theta = 2 * np.arccos(np.sqrt(1 / (n - k)))
        qc.cry(theta, qs[k], qs[k + 1])
        qc.cx(qs[k + 1], qs[k])
