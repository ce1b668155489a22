"""
Tests for Grover's search.
"""

from functools import partial

import numpy as np
import pytest
from qiskit import QuantumCircuit
from qiskit.quantum_info import Operator, Statevector

from qkatas import grover, oracles, sat
from qkatas.config import SimulatorConfig
from qkatas.runtime import Simulator, read_basis_state


class TestBuildingBlocks:
    """Phase oracles, reflections and single iterations."""

    def test_to_phase_oracle(self):
        n = 3
        qc = QuantumCircuit(n)
        qc.h(range(n))
        grover.to_phase_oracle(oracles.oracle_majority)(qc, list(qc.qubits))

        state = Statevector(qc).data
        signs = [(-1) ** (bin(i).count("1") >= 2) for i in range(2 ** n)]
        # Scratch qubit is back in |0>, so only the first 2^n amplitudes remain
        assert qc.num_qubits == n + 1
        assert np.allclose(state[:2 ** n], np.array(signs) / np.sqrt(2 ** n))
        assert np.allclose(state[2 ** n:], 0)

    def test_phase_oracle_reuses_scratch_qubit(self):
        qc = QuantumCircuit(2)
        phase_oracle = grover.to_phase_oracle(oracles.oracle_and)
        x = list(qc.qubits)
        phase_oracle(qc, x)
        phase_oracle(qc, x)
        assert qc.num_qubits == 3

    def test_phase_oracle_skips_scratch_register_used_as_input(self):
        qc = QuantumCircuit(1)
        phase_oracle = grover.to_phase_oracle(oracles.oracle_and)
        phase_oracle(qc, list(qc.qubits))
        # The "phase" qubit is now an input, so a second one is allocated
        phase_oracle(qc, list(qc.qubits))
        assert qc.num_qubits == 3

    @pytest.mark.parametrize("n", [1, 2, 3])
    def test_conditional_phase_flip(self, n):
        qc = QuantumCircuit(n)
        grover.conditional_phase_flip(qc, list(qc.qubits))

        expected = -np.eye(2 ** n)
        expected[0, 0] = 1
        assert np.allclose(Operator(qc).data, expected)

    def test_single_iteration_finds_unique_solution_of_two_qubits(self):
        qc = QuantumCircuit(2)
        qc.h([0, 1])
        grover.grover_iteration(qc, [0, 1], grover.to_phase_oracle(oracles.oracle_and))

        assert read_basis_state(qc) == [1, 1, 0]

    @pytest.mark.parametrize("n, solutions, expected", [
        (2, 1, 1), (3, 1, 2), (4, 1, 3), (6, 4, 3), (2, 4, 0),
    ])
    def test_optimal_iterations(self, n, solutions, expected):
        assert grover.optimal_iterations(n, solutions) == expected

    def test_optimal_iterations_invalid(self):
        with pytest.raises(ValueError):
            grover.optimal_iterations(3, 0)
        with pytest.raises(ValueError):
            grover.optimal_iterations(2, 5)


class TestSearch:
    """Complete searches."""

    def test_build_grover_circuit(self):
        qc = grover.build_grover_circuit(3, oracles.oracle_and)
        assert qc.num_clbits == 3
        assert qc.count_ops()["measure"] == 3

        unmeasured = grover.build_grover_circuit(3, oracles.oracle_and, iterations=1, measure=False)
        assert unmeasured.num_clbits == 0

    def test_negative_iterations_rejected(self):
        with pytest.raises(ValueError, match="must not be negative"):
            grover.build_grover_circuit(2, oracles.oracle_and, iterations=-1)

    def test_grover_search_two_qubits(self, simulator):
        for _ in range(3):
            assert grover.grover_search(2, oracles.oracle_and, 1, simulator) == [1, 1]

    def test_grover_search_alternating_bits(self, simulator):
        # Two solutions out of 16: two iterations give probability > 0.9
        hits = 0
        for _ in range(10):
            bits = grover.grover_search(4, oracles.oracle_alternating_bits,
                                        grover.optimal_iterations(4, 2), simulator)
            hits += bits in ([0, 1, 0, 1], [1, 0, 1, 0])
        assert hits >= 6

    def test_universal_grover_finds_solution(self, simulator):
        bits = grover.universal_grover(3, oracles.oracle_majority, simulator)
        assert bits is not None
        assert sum(bits) >= 2

    def test_universal_grover_without_solution(self):
        simulator = Simulator(SimulatorConfig(seed=5, max_grover_attempts=3))
        assert grover.universal_grover(2, oracles.oracle_zero, simulator) is None


class TestSolveSAT:
    """Grover's search on SAT instances."""

    def test_solve_example(self, simulator):
        problem = [
            [(0, True), (1, True), (2, True)],
            [(0, False), (1, True), (2, False)],
            [(0, True), (1, False), (2, True)],
        ]
        assignment = grover.solve_sat_with_grover(3, problem, simulator)
        assert assignment is not None
        assert sat.evaluate_sat(problem, assignment)

    def test_solve_single_solution(self, simulator):
        # x0 AND NOT x1 AND x2
        problem = [[(0, True)], [(1, False)], [(2, True)]]
        assert grover.solve_sat_with_grover(3, problem, simulator) == [True, False, True]

    def test_solve_exactly_one_3sat(self, simulator):
        problem = [[(0, True), (1, True), (2, True)], [(0, True), (1, False), (2, False)]]
        assignment = grover.solve_sat_with_grover(3, problem, simulator, exactly_one=True)
        assert assignment is not None
        assert sat.evaluate_exactly_one_3sat(problem, assignment)

    def test_unsatisfiable(self):
        simulator = Simulator(SimulatorConfig(seed=3))
        assert grover.solve_sat_with_grover(1, [[(0, True)], [(0, False)]], simulator,
                                            max_attempts=4) is None

    def test_invalid_problem(self, simulator):
        with pytest.raises(ValueError, match="out of range"):
            grover.solve_sat_with_grover(2, [[(3, True)]], simulator)
