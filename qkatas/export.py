"""
Export circuits as JSON gate lists and ASCII diagrams.
"""

import json
import os
from typing import Dict, List

import jsonschema
from qiskit import QuantumCircuit

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "quantum_circuit.schema.json")

# Instructions without a quantum target
_SKIPPED = {"barrier"}


def load_schema() -> Dict:
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def circuit_to_json(qc: QuantumCircuit) -> List[Dict]:
    """
    Describe every instruction of ``qc`` as a gate dict.

    The last qubit argument is the target and the others are controls;
    qubits are named ``Q<index>`` by their position in the circuit.
    """
    qmap = {q: f"Q{i}" for i, q in enumerate(qc.qubits)}
    json_gates = []
    for instruction in qc.data:
        op = instruction.operation
        if op.name in _SKIPPED:
            continue
        qargs = instruction.qubits
        name = op.name.upper()
        controls = [qmap[q] for q in qargs[:-1]]
        gate_json = {
            "name": "CCX" if name == "MCX" and len(controls) == 2 else name,
            "targets": [qmap[q] for q in qargs[-1:]],
        }
        if controls:
            gate_json["controls"] = controls
        if op.params:
            gate_json["params"] = [float(p) for p in op.params]
        if instruction.clbits:
            gate_json["clbits"] = [qc.find_bit(c).index for c in instruction.clbits]
        json_gates.append(gate_json)
    return json_gates


def validate_circuit_json(json_gates: List[Dict], schema: Dict = None):
    """
    Raises:
        jsonschema.exceptions.ValidationError: If the gate list does not
            match the bundled schema
    """
    jsonschema.validate(instance=json_gates, schema=schema or load_schema())


def write_circuit_json(qc: QuantumCircuit, filename):
    json_gates = circuit_to_json(qc)
    validate_circuit_json(json_gates)
    with open(filename, 'w') as f:
        json.dump(json_gates, f, indent=2, ensure_ascii=False)


def write_circuit_ascii(qc: QuantumCircuit, filename):
    ascii_diagram = qc.draw(output='text')
    with open(filename, 'w') as f:
        f.write(str(ascii_diagram))
