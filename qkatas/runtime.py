"""
Thin layer between the katas and the Qiskit simulators.

Sampled measurements go through :class:`Simulator`, which wraps
``qiskit_aer.AerSimulator``. Exact checks on classical inputs use
``qiskit.quantum_info.Statevector``.
"""

from typing import Callable, List, Optional, Sequence, Union

import numpy as np
from qiskit import AncillaRegister, ClassicalRegister, QuantumCircuit, QuantumRegister, transpile
from qiskit.circuit import Qubit
from qiskit.quantum_info import Statevector
from qiskit_aer import AerSimulator

from .config import DEFAULT_CONFIG, SimulatorConfig
from .logging_config import get_logger

logger = get_logger(__name__)

QubitLike = Union[Qubit, int]
MarkingOracle = Callable[[QuantumCircuit, Sequence[Qubit], Qubit], None]
PhaseOracle = Callable[[QuantumCircuit, Sequence[Qubit]], None]


def qubit_index(qc: QuantumCircuit, qubit: QubitLike) -> int:
    """Return the position of ``qubit`` in ``qc``."""
    if isinstance(qubit, (int, np.integer)):
        if not 0 <= qubit < qc.num_qubits:
            raise ValueError(f"Qubit index {qubit} out of range for {qc.num_qubits} qubits")
        return int(qubit)
    return qc.find_bit(qubit).index


class Simulator:
    """
    Runs circuits on the Aer simulator one shot at a time.
    """

    def __init__(self, config: Optional[SimulatorConfig] = None):
        """
        Initialize the simulator.

        Args:
            config: Simulator configuration (defaults to DEFAULT_CONFIG)
        """
        self.config = config or DEFAULT_CONFIG
        self.backend = AerSimulator(method=self.config.method)
        self._rng = np.random.default_rng(self.config.seed)

    def _next_seed(self) -> Optional[int]:
        if self.config.seed is None:
            return None
        return int(self._rng.integers(2 ** 31))

    def random_int(self, high: int) -> int:
        """Return a random integer in ``[0, high)``."""
        return int(self._rng.integers(high))

    def sample(self, qc: QuantumCircuit, qubits: Sequence[QubitLike]) -> List[int]:
        """
        Measure ``qubits`` of a copy of ``qc`` once.

        Args:
            qc: Circuit preparing the state; it is not modified
            qubits: Qubits to measure

        Returns:
            List[int]: Measured bits, in the order of ``qubits``
        """
        if len(qubits) == 0:
            raise ValueError("At least one qubit must be measured")
        if qc.num_clbits:
            circuit = qc.remove_final_measurements(inplace=False)
        else:
            circuit = qc.copy()
        indices = [qubit_index(circuit, q) for q in qubits]

        creg = ClassicalRegister(len(indices), "sample")
        circuit.add_register(creg)
        circuit.measure(indices, creg)

        compiled = transpile(circuit, self.backend,
                             optimization_level=self.config.optimization_level)
        run_options = {"shots": 1, "memory": True}
        seed = self._next_seed()
        if seed is not None:
            run_options["seed_simulator"] = seed
        result = self.backend.run(compiled, **run_options).result()
        # Registers are space-separated with the last added one leftmost
        memory = result.get_memory()[0].split()[0]
        bits = [int(bit) for bit in reversed(memory)]
        logger.debug("Sampled qubits %s of a %d-qubit circuit: %s",
                     indices, circuit.num_qubits, bits)
        return bits


def allocate_ancillas(qc: QuantumCircuit, size: int, name: str = "anc",
                      exclude: Sequence[QubitLike] = ()) -> List[Qubit]:
    """
    Get ``size`` scratch qubits in |0> for ``qc``.

    A register called ``name`` that is already large enough is reused, so
    every user of a register must return it to |0> before releasing it.
    Registers holding any qubit of ``exclude`` are never reused. Otherwise
    a new ancilla register is added to the circuit.

    Args:
        qc: Circuit to allocate in
        size: Number of qubits needed
        name: Register name prefix
        exclude: Operands of the caller

    Returns:
        List[Qubit]: The scratch qubits
    """
    if size <= 0:
        return []
    busy = {qubit_index(qc, q) for q in exclude}
    for reg in qc.qregs:
        if not (reg.name.startswith(name) and isinstance(reg, AncillaRegister)):
            continue
        if reg.size >= size and not busy & {qc.find_bit(q).index for q in reg}:
            return list(reg)[:size]
    existing = {reg.name for reg in qc.qregs}
    counter = 0
    reg_name = name
    while reg_name in existing:
        counter += 1
        reg_name = f"{name}{counter}"
    reg = AncillaRegister(size, reg_name)
    qc.add_register(reg)
    logger.debug("Allocated ancilla register %s of size %d", reg_name, size)
    return list(reg)


def read_basis_state(qc: QuantumCircuit, tol: float = 1e-9) -> List[int]:
    """
    Simulate ``qc`` exactly and return the bit of every qubit.

    Raises:
        ValueError: If the final state is not a computational basis state
    """
    probabilities = Statevector(qc).probabilities()
    index = int(np.argmax(probabilities))
    if abs(probabilities[index] - 1) > tol:
        raise ValueError("Circuit does not produce a computational basis state")
    return [(index >> k) & 1 for k in range(qc.num_qubits)]


def evaluate_marking_oracle(num_inputs: int, oracle: MarkingOracle,
                            bits: Sequence[int]) -> bool:
    """
    Evaluate a marking oracle on a classical input.

    Args:
        num_inputs: Number of input qubits the oracle acts on
        oracle: Marking oracle ``oracle(qc, x, y)``
        bits: Classical input, ``bits[i]`` goes to ``x[i]``

    Returns:
        bool: f(bits)
    """
    if len(bits) != num_inputs:
        raise ValueError(f"Expected {num_inputs} input bits, got {len(bits)}")
    x = QuantumRegister(num_inputs, 'x')
    y = QuantumRegister(1, 'y')
    qc = QuantumCircuit(x, y)
    for i, bit in enumerate(bits):
        if bit:
            qc.x(x[i])
    oracle(qc, list(x), y[0])

    state = read_basis_state(qc)
    if [int(bool(b)) for b in bits] != state[:num_inputs]:
        raise ValueError("Oracle modified its input register")
    if any(state[num_inputs + 1:]):
        raise ValueError("Oracle left scratch qubits dirty")
    return bool(state[num_inputs])
