"""
Boolean satisfiability instances and their marking oracles.

A SAT instance is a list of clauses in conjunctive normal form; each clause
is a list of literals ``(variable_index, polarity)`` where ``polarity`` is
True for x_i and False for NOT x_i. Variable indices are 0-based.
"""

import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pysat.solvers import Solver
from qiskit import QuantumCircuit

from .logging_config import get_logger
from .oracles import oracle_and, oracle_or
from .runtime import QubitLike, allocate_ancillas

logger = get_logger(__name__)

Literal = Tuple[int, bool]
Clause = List[Literal]
SATProblem = List[Clause]

ClauseOracle = Callable[[QuantumCircuit, Sequence[QubitLike], QubitLike, Clause], None]


def validate_problem(problem: SATProblem, num_variables: int):
    """
    Check that every literal refers to one of ``num_variables`` variables.

    Raises:
        ValueError: On an out-of-range variable index
    """
    for clause in problem:
        for var_idx, _ in clause:
            if not 0 <= var_idx < num_variables:
                raise ValueError(
                    f"Variable index {var_idx} out of range for {num_variables} variables"
                )


def _unique_literals(clause: Clause) -> Optional[Dict[int, bool]]:
    """
    Merge repeated variables of a clause.

    Returns:
        Variable index -> polarity, or None if the clause contains both
        x and NOT x and is therefore always true
    """
    unique_vars = {}
    for var_idx, polarity in clause:
        if var_idx in unique_vars:
            if unique_vars[var_idx] != bool(polarity):
                return None
        else:
            unique_vars[var_idx] = bool(polarity)
    return unique_vars


def oracle_sat_clause(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
                      clause: Clause):
    """
    Mark the assignments that satisfy a single clause (an OR of literals).

    Args:
        qc: Circuit to append to
        x: Variable qubits
        y: Target qubit
        clause: Literals of the clause
    """
    validate_problem([clause], len(x))
    unique_vars = _unique_literals(clause)
    if unique_vars is None:
        # (x OR NOT x) = True
        qc.x(y)
        return
    if not unique_vars:
        # Empty clause is unsatisfiable
        return

    negated = [x[var_idx] for var_idx, polarity in unique_vars.items() if not polarity]
    if negated:
        qc.x(negated)
    oracle_or(qc, [x[var_idx] for var_idx in unique_vars], y)
    if negated:
        qc.x(negated)


def oracle_exactly_one_clause(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
                              clause: Clause):
    """
    Mark the assignments where exactly one literal of the clause is true.

    For up to three literals, "exactly one" is their XOR with the
    all-true case removed.
    """
    validate_problem([clause], len(x))
    variables = [var_idx for var_idx, _ in clause]
    if len(set(variables)) != len(variables):
        raise ValueError("Exactly-one clauses must not repeat a variable")
    if len(clause) > 3:
        raise ValueError("Exactly-one clauses support at most 3 literals")
    if not clause:
        return

    negated = [x[var_idx] for var_idx, polarity in clause if not polarity]
    controls = [x[var_idx] for var_idx in variables]
    if negated:
        qc.x(negated)
    for q in controls:
        qc.cx(q, y)
    if len(controls) == 3:
        qc.mcx(controls, y)
    if negated:
        qc.x(negated)


def _oracle_cnf(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
                problem: SATProblem, clause_oracle: ClauseOracle):
    validate_problem(problem, len(x))
    if not problem:
        # Empty conjunction is true
        qc.x(y)
        return

    clause_qubits = allocate_ancillas(qc, len(problem), "clause", exclude=list(x) + [y])
    for clause, target in zip(problem, clause_qubits):
        clause_oracle(qc, x, target, clause)

    oracle_and(qc, clause_qubits, y)

    # Uncompute clause qubits
    for clause, target in reversed(list(zip(problem, clause_qubits))):
        clause_oracle(qc, x, target, clause)


def oracle_sat(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
               problem: SATProblem):
    """
    k-SAT marking oracle: flip ``y`` iff the assignment in ``x`` satisfies
    every clause of ``problem``.

    Each clause is evaluated into its own scratch qubit, the scratch qubits
    are AND-ed into ``y`` and then uncomputed back to |0>.
    """
    _oracle_cnf(qc, x, y, problem, oracle_sat_clause)


def oracle_exactly_one_3sat(qc: QuantumCircuit, x: Sequence[QubitLike], y: QubitLike,
                            problem: SATProblem):
    """
    Exactly-1 3-SAT marking oracle: flip ``y`` iff every clause has exactly
    one true literal.
    """
    _oracle_cnf(qc, x, y, problem, oracle_exactly_one_clause)


def _literal_value(literal: Literal, assignment: Sequence[bool]) -> bool:
    var_idx, polarity = literal
    return bool(assignment[var_idx]) == bool(polarity)


def evaluate_sat(problem: SATProblem, assignment: Sequence[bool]) -> bool:
    """Classically check an assignment against a CNF formula."""
    validate_problem(problem, len(assignment))
    for clause in problem:
        if not any(_literal_value(literal, assignment) for literal in clause):
            return False
    return True


def evaluate_exactly_one_3sat(problem: SATProblem, assignment: Sequence[bool]) -> bool:
    """Classically check that every clause has exactly one true literal."""
    validate_problem(problem, len(assignment))
    return all(
        sum(_literal_value(literal, assignment) for literal in clause) == 1
        for clause in problem
    )


def count_solutions(problem: SATProblem, num_variables: int,
                    evaluate: Callable[[SATProblem, Sequence[bool]], bool] = evaluate_sat) -> int:
    """Count satisfying assignments by enumerating all 2^n of them."""
    validate_problem(problem, num_variables)
    count = 0
    for value in range(2 ** num_variables):
        assignment = [bool((value >> k) & 1) for k in range(num_variables)]
        if evaluate(problem, assignment):
            count += 1
    return count


def from_dimacs_clauses(clauses: Sequence[Sequence[int]]) -> SATProblem:
    """Convert DIMACS clauses such as ``[1, -2, 3]`` into literal pairs."""
    problem = []
    for clause in clauses:
        if any(lit == 0 for lit in clause):
            raise ValueError("DIMACS literal 0 is a clause terminator, not a variable")
        problem.append([(abs(lit) - 1, lit > 0) for lit in clause])
    return problem


def to_dimacs_clauses(problem: SATProblem) -> List[List[int]]:
    """Convert literal pairs back into DIMACS clauses."""
    return [[(var_idx + 1) if polarity else -(var_idx + 1) for var_idx, polarity in clause]
            for clause in problem]


def solve_classically(problem: SATProblem, num_variables: int) -> Optional[List[bool]]:
    """
    Solve a CNF formula with PySAT.

    Returns:
        A satisfying assignment, or None if the formula is unsatisfiable
    """
    validate_problem(problem, num_variables)
    with Solver(name='g3', bootstrap_with=to_dimacs_clauses(problem)) as solver:
        if not solver.solve():
            logger.info("PySAT: formula is UNSATISFIABLE")
            return None
        model = solver.get_model() or []
    assignment = [False] * num_variables
    for lit in model:
        if lit > 0 and lit <= num_variables:
            assignment[lit - 1] = True
    logger.info("PySAT: formula is SATISFIABLE")
    return assignment


def generate_random_cnf(nvars: int, nclauses: int, k: int = 3,
                        seed: Optional[int] = None) -> SATProblem:
    """Random k-SAT instance with k distinct variables per clause."""
    if k > nvars:
        raise ValueError(f"Clause width {k} exceeds the number of variables {nvars}")
    rng = random.Random(seed)
    clauses = []
    for _ in range(nclauses):
        clause_vars = rng.sample(range(1, nvars + 1), k)
        clauses.append([v if rng.choice([True, False]) else -v for v in clause_vars])
    return from_dimacs_clauses(clauses)


def write_dimacs_cnf(nvars: int, problem: SATProblem, path):
    with open(path, 'w') as f:
        f.write(f"p cnf {nvars} {len(problem)}\n")
        for clause in to_dimacs_clauses(problem):
            f.write(" ".join(str(lit) for lit in clause) + " 0\n")


def read_dimacs_cnf(path) -> Tuple[int, SATProblem]:
    nvars = 0
    clauses = []
    with open(path, 'r') as f:
        for line in f:
            line = line.strip()
            if line.startswith('c') or line == '':
                continue
            if line.startswith('p cnf'):
                nvars = int(line.split()[2])
                continue
            clause = [int(lit) for lit in line.split() if lit != '0']
            if clause:
                clauses.append(clause)
    problem = from_dimacs_clauses(clauses)
    validate_problem(problem, nvars)
    return nvars, problem
