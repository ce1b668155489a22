"""
Test suite for the SAT oracle circuits.
"""

import pytest
from qiskit import QuantumCircuit, transpile
from qiskit_aer import AerSimulator

from qkatas import SATOracle, create_simple_3sat_example
from qkatas.sat import evaluate_sat


class TestSATOracle:
    """Test cases for the SATOracle class."""

    def test_oracle_initialization(self):
        """Test basic oracle initialization."""
        oracle = SATOracle(3)
        assert oracle.num_variables == 3
        assert len(oracle.clauses) == 0

    def test_add_clause(self):
        """Test adding clauses to the oracle."""
        oracle = SATOracle(3)
        oracle.add_clause([(0, True), (1, True), (2, True)])
        oracle.add_clause([(0, False), (1, True), (2, False)])

        assert len(oracle.clauses) == 2
        assert oracle.clauses[1] == [(0, False), (1, True), (2, False)]

    def test_invalid_variable_index(self):
        """Test that literals on unknown variables are rejected."""
        oracle = SATOracle(3)

        with pytest.raises(ValueError, match="out of range"):
            oracle.add_clause([(0, True), (3, False)])

    def test_no_variables(self):
        with pytest.raises(ValueError):
            SATOracle(0)

    def test_oracle_circuit_creation(self):
        """Test that oracle circuit is created successfully."""
        oracle = create_simple_3sat_example()
        circuit = oracle.build_oracle_circuit()

        assert isinstance(circuit, QuantumCircuit)
        assert circuit.depth() > 0
        assert oracle.circuit is circuit

    def test_grover_circuit_creation(self):
        """Test that Grover circuit is created successfully."""
        oracle = create_simple_3sat_example()
        circuit = oracle.create_grover_circuit()

        assert isinstance(circuit, QuantumCircuit)
        assert circuit.depth() > 0

    def test_empty_oracle_grover_fails(self):
        """Test that Grover circuit creation fails with no clauses."""
        oracle = SATOracle(3)

        with pytest.raises(ValueError, match="No clauses added to the oracle"):
            oracle.create_grover_circuit()
        with pytest.raises(ValueError, match="No clauses added to the oracle"):
            oracle.solve()

    def test_circuit_simulation(self):
        """Test that the measured Grover circuit runs on Aer."""
        oracle = create_simple_3sat_example()
        circuit = oracle.create_grover_circuit(iterations=1)

        simulator = AerSimulator(method='statevector')
        transpiled = transpile(circuit, simulator)
        counts = simulator.run(transpiled, shots=64, seed_simulator=7).result().get_counts()

        assert sum(counts.values()) == 64
        assert all(len(key) == oracle.num_variables for key in counts)

    def test_solve(self, simulator):
        """Test that universal Grover search returns a satisfying assignment."""
        oracle = create_simple_3sat_example()
        assignment = oracle.solve(simulator)

        assert assignment is not None
        assert evaluate_sat(oracle.clauses, assignment)


class TestCircuitProperties:
    """Test various properties of the generated circuits."""

    def test_circuit_depth_reasonable(self):
        """Test that circuit depth is reasonable for the problem size."""
        oracle = create_simple_3sat_example()
        circuit = oracle.build_oracle_circuit()

        expected_max_depth = (oracle.num_variables + len(oracle.clauses)) * 10
        assert circuit.depth() < expected_max_depth

    def test_qubit_count_correct(self):
        """Test that the number of qubits is correct."""
        oracle = create_simple_3sat_example()
        circuit = oracle.build_oracle_circuit()

        # Variables, one target and one scratch qubit per clause
        expected_qubits = oracle.num_variables + 1 + len(oracle.clauses)
        assert circuit.num_qubits == expected_qubits
        assert circuit.num_clbits == 0

    def test_grover_qubit_count(self):
        """Test the register layout of the Grover circuit."""
        oracle = create_simple_3sat_example()
        circuit = oracle.create_grover_circuit(iterations=2)

        # Variables, the phase kickback qubit and the clause qubits
        assert circuit.num_qubits == oracle.num_variables + 1 + len(oracle.clauses)
        assert circuit.num_clbits == oracle.num_variables

    def test_grover_iterations_change_depth(self):
        """Test that more iterations give a deeper circuit."""
        oracle = create_simple_3sat_example()

        shallow = oracle.create_grover_circuit(iterations=1)
        deep = oracle.create_grover_circuit(iterations=2)

        assert deep.depth() > shallow.depth()


def test_example_integration():
    """Integration test using the provided example."""
    oracle = create_simple_3sat_example()

    oracle_circuit = oracle.build_oracle_circuit()
    grover_circuit = oracle.create_grover_circuit()

    assert oracle_circuit.num_qubits >= oracle.num_variables
    assert grover_circuit.num_qubits >= oracle.num_variables
