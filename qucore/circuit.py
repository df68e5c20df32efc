"""
Sequential circuit executor.

A QuantumCircuit queues gate operations and applies them, in insertion
order, to a register it owns. Operations are validated when they are added,
so run() never stops halfway through a circuit.
"""

import numpy as np
from typing import Any, Dict, List, Optional, Sequence

from .core import QuantumRegister, _as_gate
from .gates import get_gate

_KINDS = {2: "single", 4: "double", 8: "triple"}


class QuantumCircuit:
    """
    Ordered list of gate operations over one register.

    Args:
        num_qubits: Size of the register
        rng: Random source for measurements

    Example:
        >>> qc = QuantumCircuit(2)
        >>> qc.add_gate("H", [0]).add_gate("CNOT", [0, 1])
        >>> qc.run()["|11⟩"]   # ≈ 0.7071
    """

    def __init__(self, num_qubits: int, rng: Optional[np.random.Generator] = None):
        self.num_qubits = num_qubits
        self.rng = rng if rng is not None else np.random.default_rng()
        self.register = QuantumRegister(num_qubits, rng=self.rng)
        self.gates: List[Dict[str, Any]] = []
        self.measurements: List[List[int]] = []

    def add_gate(self, gate, targets: Sequence[int], params: Optional[Dict[str, Any]] = None):
        """
        Queue a gate. The register is not touched until run().

        Args:
            gate: A gate matrix, a gate name understood by gates.get_gate,
                  or a list of 2x2 matrices (one per target)
            targets: Qubit indices the gate acts on
            params: Gate parameters, e.g. {"theta": 0.5} for "RX"

        Returns:
            self, so calls can be chained

        Raises:
            IndexError, ValueError, DimensionMismatchError: If the operation
                could never be applied to this circuit's register
        """
        targets = list(targets)
        params = dict(params or {})
        if not targets:
            raise ValueError("A gate needs at least one target qubit")
        for t in targets:
            if not 0 <= t < self.num_qubits:
                raise IndexError(
                    f"Qubit index {t} out of range for {self.num_qubits}-qubit circuit"
                )
        if len(targets) != len(set(targets)):
            raise ValueError("The same qubit cannot occur twice as an argument")

        if isinstance(gate, str):
            name = gate.upper()
            matrix = _as_gate(get_gate(gate, **params), len(targets))
            kind = _KINDS.get(matrix.shape[0], "custom")
        elif isinstance(gate, (list, tuple)) and gate and np.ndim(gate[0]) == 2:
            name = "multi"
            if len(gate) != len(targets):
                raise ValueError(f"{len(gate)} gate(s) given for {len(targets)} target(s)")
            matrix = [_as_gate(g, 1) for g in gate]
            kind = "multi"
        else:
            name = "custom"
            matrix = _as_gate(gate, len(targets))
            kind = _KINDS.get(matrix.shape[0], "custom")

        self.gates.append({
            "gate": matrix,
            "name": name,
            "kind": kind,
            "targets": targets,
            "params": params,
        })
        return self

    def run(self, verbose: bool = False) -> Dict[str, complex]:
        """
        Apply every queued gate in order and return the state vector.

        Gates act on the current register, so running twice applies the
        circuit twice; call reset() in between to start from |0...0⟩.
        """
        for step, op in enumerate(self.gates, start=1):
            if op["kind"] == "multi":
                self.register.apply_multi_qubit_gate(op["gate"], op["targets"])
            else:
                self.register.apply_gate(op["gate"], *op["targets"])
            if verbose:
                print(f"Step {step}: {op['name']} on {op['targets']}")
        return self.register.get_state_vector()

    def measure(self) -> List[int]:
        """Measure the register, record the outcome and return it."""
        result = self.register.measure()
        self.measurements.append(result)
        return result

    def get_probabilities(self) -> Dict[str, float]:
        return self.register.get_probabilities()

    def get_density_matrix(self) -> np.ndarray:
        return self.register.get_density_matrix()

    def reset(self):
        """Fresh all-|0⟩ register and empty measurement history. Gates are kept."""
        self.register = QuantumRegister(self.num_qubits, rng=self.rng)
        self.measurements = []

    def visualize(self) -> Dict[str, Any]:
        """Plain-data description of the circuit for external rendering."""
        return {
            "num_qubits": self.num_qubits,
            "gates": [
                {
                    "step": step,
                    "gate": op["kind"],
                    "name": op["name"],
                    "targets": list(op["targets"]),
                    "params": dict(op["params"]),
                }
                for step, op in enumerate(self.gates, start=1)
            ],
            "measurements": [list(m) for m in self.measurements],
        }

    def __len__(self):
        return len(self.gates)
