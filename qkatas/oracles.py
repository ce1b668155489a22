"""
Marking oracles for boolean functions of a bit string.

A marking oracle ``oracle(qc, x, y)`` implements |x>|y> -> |x>|y xor f(x)>.
These are the black boxes used by the Deutsch-Jozsa, Bernstein-Vazirani
and Grover katas.
"""

from typing import Sequence

from qiskit import QuantumCircuit

from .runtime import QubitLike


def _require_inputs(x: Sequence[QubitLike], count: int = 1):
    if len(x) < count:
        raise ValueError(f"Oracle needs at least {count} input qubit(s), got {len(x)}")


def _require_same_length(x: Sequence[QubitLike], r: Sequence[int]):
    if len(x) != len(r):
        raise ValueError(f"Input register has {len(x)} qubits but the bit vector has {len(r)} bits")


def oracle_zero(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """f(x) = 0"""


def oracle_one(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """f(x) = 1"""
    qc.x(y)


def oracle_kth_qubit(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike, k: int):
    """f(x) = x_k"""
    if not 0 <= k < len(x):
        raise ValueError(f"Index {k} out of range for {len(x)} input qubits")
    qc.cx(x[k], y)


def oracle_odd_number_of_ones(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """f(x) = 1 if x contains an odd number of ones."""
    for q in x:
        qc.cx(q, y)


def oracle_xor(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """f(x) = x_0 xor x_1 xor ... xor x_{N-1}"""
    _require_inputs(x)
    oracle_odd_number_of_ones(qc, x, y)


def oracle_product(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
                   r: Sequence[int]):
    """f(x) = sum_i r_i x_i mod 2"""
    _require_same_length(x, r)
    for q, bit in zip(x, r):
        if bit:
            qc.cx(q, y)


def oracle_product_with_negation(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
                                 r: Sequence[int]):
    """f(x) = sum_i (r_i x_i + (1 - r_i)(1 - x_i)) mod 2"""
    _require_same_length(x, r)
    for q, bit in zip(x, r):
        qc.cx(q, y)
        if not bit:
            # 1 - x_i = x_i xor 1
            qc.x(y)


def oracle_hamming_with_prefix(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
                               prefix: Sequence[int]):
    """f(x) = parity of x, plus 1 if x starts with ``prefix``, mod 2."""
    if not 1 <= len(prefix) <= len(x):
        raise ValueError(f"Prefix length must be between 1 and {len(x)}, got {len(prefix)}")
    oracle_odd_number_of_ones(qc, x, y)

    zeros = [x[i] for i, bit in enumerate(prefix) if not bit]
    if zeros:
        qc.x(zeros)
    qc.mcx(list(x[:len(prefix)]), y)
    if zeros:
        qc.x(zeros)


def oracle_majority(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """f(x) = 1 if at least two of the three input bits are set."""
    if len(x) != 3:
        raise ValueError("Majority oracle needs exactly 3 input qubits")
    # maj(a, b, c) = ab xor ac xor bc
    qc.ccx(x[0], x[1], y)
    qc.ccx(x[0], x[2], y)
    qc.ccx(x[1], x[2], y)


def oracle_and(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """f(x) = x_0 and x_1 and ... and x_{N-1}"""
    _require_inputs(x)
    qc.mcx(list(x), y)


def oracle_or(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """
    f(x) = x_0 or x_1 or ... or x_{N-1}

    OR(x) = NOT AND(NOT x): flip the inputs, mark the all-zero string,
    invert the target and restore the inputs.
    """
    _require_inputs(x)
    qc.x(list(x))
    qc.mcx(list(x), y)
    qc.x(y)
    qc.x(list(x))


def oracle_alternating_bits(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
    """f(x) = 1 if x is 0101... or 1010..."""
    _require_inputs(x)
    n = len(x)
    if n == 1:
        qc.x(y)
        return
    # x_{i+1} <- x_i xor x_{i+1}, highest index first so x_i is still untouched
    for i in reversed(range(n - 1)):
        qc.cx(x[i], x[i + 1])
    qc.mcx(list(x[1:]), y)
    for i in range(n - 1):
        qc.cx(x[i], x[i + 1])


def phase_oracle_product(qc: QuantumCircuit, x: Sequence[QubitLike], r: Sequence[int]):
    """Phase oracle |x> -> (-1)^(r.x) |x>."""
    _require_same_length(x, r)
    for q, bit in zip(x, r):
        if bit:
            qc.z(q)
