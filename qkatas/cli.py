"""
Command line driver: solve SAT instances with Grover's search and run the
Deutsch-Jozsa and Bernstein-Vazirani algorithms.
"""

import argparse
import logging
import random
from functools import partial

from qiskit import QuantumCircuit, QuantumRegister

from .algorithms import bernstein_vazirani, deutsch_jozsa
from .config import SimulatorConfig
from .export import write_circuit_ascii, write_circuit_json
from .grover import solve_sat_with_grover
from .logging_config import setup_logging
from .oracles import oracle_odd_number_of_ones, oracle_one, oracle_product
from .runtime import Simulator
from .sat import (evaluate_exactly_one_3sat, evaluate_sat, generate_random_cnf,
                  oracle_exactly_one_3sat, oracle_sat, read_dimacs_cnf,
                  solve_classically, to_dimacs_clauses, write_dimacs_cnf)


def _format_assignment(assignment):
    return " ".join(str(i + 1) if value else str(-(i + 1)) for i, value in enumerate(assignment))


def _oracle_circuit(nvars, problem, exactly_one):
    qreg = QuantumRegister(nvars, 'q')
    target = QuantumRegister(1, 'y')
    qc = QuantumCircuit(qreg, target)
    oracle = oracle_exactly_one_3sat if exactly_one else oracle_sat
    oracle(qc, list(qreg), target[0], problem)
    return qc


def run_sat(args, simulator):
    if args.random:
        seed = args.seed if args.seed is not None else random.randint(0, 999999)
        nvars = args.nvars
        problem = generate_random_cnf(nvars, args.nclauses, k=args.k, seed=seed)
        print(f"Random CNF generated (nvars={nvars}, nclauses={args.nclauses}, seed={seed})")
        if args.cnf:
            write_dimacs_cnf(nvars, problem, args.cnf)
            print(f"Random CNF written to {args.cnf}")
    elif args.cnf:
        nvars, problem = read_dimacs_cnf(args.cnf)
    else:
        print("Either --cnf or --random is required")
        return 2

    for clause in to_dimacs_clauses(problem):
        print(" ".join(str(lit) for lit in clause) + " 0")

    if args.json or args.ascii:
        qc = _oracle_circuit(nvars, problem, args.exactly_one)
        if args.json:
            write_circuit_json(qc, args.json)
            print(f"Oracle circuit JSON written to {args.json}")
        if args.ascii:
            write_circuit_ascii(qc, args.ascii)
            print(f"ASCII diagram written to {args.ascii}")

    assignment = solve_sat_with_grover(nvars, problem, simulator, args.max_attempts,
                                       exactly_one=args.exactly_one)
    if assignment is None:
        print("Grover result: no solution found")
    else:
        evaluate = evaluate_exactly_one_3sat if args.exactly_one else evaluate_sat
        verdict = "SATISFIABLE" if evaluate(problem, assignment) else "INVALID"
        print(f"Grover result: {verdict} {_format_assignment(assignment)}")

    if not args.exactly_one:
        model = solve_classically(problem, nvars)
        if model is None:
            print("PySAT result: UNSATISFIABLE")
        else:
            print(f"PySAT result: SATISFIABLE {_format_assignment(model)}")
    return 0


def run_bv(args, simulator):
    if not args.secret or any(c not in "01" for c in args.secret):
        print(f"Secret must be a non-empty bit string, got {args.secret!r}")
        return 2
    secret = [int(c) for c in args.secret]
    bits = bernstein_vazirani(len(secret), partial(oracle_product, r=secret), simulator)
    print("".join(str(bit) for bit in bits))
    return 0


def run_dj(args, simulator):
    if args.function == "constant":
        oracle = oracle_one
    else:
        oracle = oracle_odd_number_of_ones
    is_constant = deutsch_jozsa(args.n, oracle, simulator)
    print("constant" if is_constant else "balanced")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Quantum katas: Grover SAT solving, Deutsch-Jozsa and Bernstein-Vazirani.")
    parser.add_argument('--seed', type=int, default=None, help="Seed for the simulator and random CNF generation.")
    parser.add_argument('--verbose', action='store_true', help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command")

    sat_parser = sub.add_parser("sat", help="Solve a CNF instance with Grover's search.")
    sat_parser.add_argument('--cnf', type=str, default=None, help="Input CNF file (output file with --random).")
    sat_parser.add_argument('--random', action='store_true', help="Generate a random CNF instance.")
    sat_parser.add_argument('--nvars', type=int, default=3, help="Number of variables for random CNF.")
    sat_parser.add_argument('--nclauses', type=int, default=4, help="Number of clauses for random CNF.")
    sat_parser.add_argument('--k', type=int, default=3, help="Clause width for random CNF.")
    sat_parser.add_argument('--exactly-one', action='store_true', help="Treat clauses as exactly-1 3-SAT constraints.")
    sat_parser.add_argument('--max-attempts', type=int, default=None, help="Maximum number of Grover candidates.")
    sat_parser.add_argument('--json', type=str, default=None, help="Output JSON file for the oracle circuit.")
    sat_parser.add_argument('--ascii', type=str, default=None, help="ASCII diagram output file for the oracle circuit.")

    bv_parser = sub.add_parser("bv", help="Run Bernstein-Vazirani on a secret bit string.")
    bv_parser.add_argument('secret', help="Secret bit string r of f(x) = r.x mod 2, e.g. 1101.")

    dj_parser = sub.add_parser("dj", help="Run Deutsch-Jozsa on a constant or balanced function.")
    dj_parser.add_argument('function', choices=["constant", "balanced"])
    dj_parser.add_argument('--n', type=int, default=3, help="Number of input bits.")

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    simulator = Simulator(SimulatorConfig(seed=args.seed))

    commands = {"sat": run_sat, "bv": run_bv, "dj": run_dj}
    if args.command not in commands:
        parser.print_help()
        return 1
    try:
        return commands[args.command](args, simulator)
    except ValueError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
