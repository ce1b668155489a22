"""
SAT oracle circuits and Grover search for a SAT instance built clause by clause.
"""

from typing import List, Optional, Sequence

from qiskit import QuantumCircuit, QuantumRegister

from .grover import build_grover_circuit, solve_sat_with_grover
from .runtime import QubitLike, Simulator
from .sat import Clause, SATProblem, oracle_sat, validate_problem


class SATOracle:
    """
    A CNF formula over ``num_variables`` variables that grows one clause at
    a time and can be turned into a marking oracle or a Grover circuit.
    """

    def __init__(self, num_variables: int):
        if num_variables < 1:
            raise ValueError("At least one variable is required")
        self.num_variables = num_variables
        self.clauses: SATProblem = []
        self.circuit = None

    def add_clause(self, clause: Clause):
        """
        Append a disjunction of literals to the formula.

        Raises:
            ValueError: If a literal names a variable outside the formula
        """
        validate_problem([clause], self.num_variables)
        self.clauses.append(list(clause))

    def mark(self, qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike):
        """Flip ``y`` iff ``x`` satisfies every clause added so far."""
        oracle_sat(qc, x, y, self.clauses)

    def build_oracle_circuit(self) -> QuantumCircuit:
        """
        Lay the marking oracle out on a variable register ``q`` and a
        target register ``y``; clause scratch qubits follow.

        The circuit is also kept on ``self.circuit``.
        """
        qreg = QuantumRegister(self.num_variables, 'q')
        target = QuantumRegister(1, 'y')
        circuit = QuantumCircuit(qreg, target)
        self.mark(circuit, list(qreg), target[0])
        self.circuit = circuit
        return circuit

    def create_grover_circuit(self, iterations: Optional[int] = None) -> QuantumCircuit:
        """
        Measured Grover circuit searching for a satisfying assignment.

        Args:
            iterations: Oracle calls; None picks the count for a single solution
        """
        if not self.clauses:
            raise ValueError("No clauses added to the oracle")
        return build_grover_circuit(self.num_variables, self.mark, iterations)

    def solve(self, simulator: Optional[Simulator] = None,
              max_attempts: Optional[int] = None) -> Optional[List[bool]]:
        """Search for a satisfying assignment with universal Grover search."""
        if not self.clauses:
            raise ValueError("No clauses added to the oracle")
        return solve_sat_with_grover(self.num_variables, self.clauses, simulator, max_attempts)


def create_simple_3sat_example() -> SATOracle:
    """Three variables, three clauses and five satisfying assignments."""
    oracle = SATOracle(3)

    # (x0 | x1 | x2) & (~x0 | x1 | ~x2) & (x0 | ~x1 | x2)
    oracle.add_clause([(0, True), (1, True), (2, True)])
    oracle.add_clause([(0, False), (1, True), (2, False)])
    oracle.add_clause([(0, True), (1, False), (2, True)])

    return oracle
