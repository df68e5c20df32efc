"""
Preparation of standard entangled states.

Bell states are the four maximally entangled two-qubit states:

    phi+ = (|00⟩ + |11⟩)/√2        psi+ = (|01⟩ + |10⟩)/√2
    phi- = (|00⟩ - |11⟩)/√2        psi- = (|01⟩ - |10⟩)/√2

All are prepared from |00⟩ with H and CNOT, followed by X and/or Z on
qubit 0 or 1 to pick the variant.
"""

import numpy as np
from typing import Dict, NamedTuple, Optional

from .core import QuantumRegister
from .gates import H_gate, X_gate, Z_gate, CNOT_gate

BELL_STATES = {
    "phi+": "|00⟩ + |11⟩",
    "phi-": "|00⟩ - |11⟩",
    "psi+": "|01⟩ + |10⟩",
    "psi-": "|01⟩ - |10⟩",
}


class BellState(NamedTuple):
    register: QuantumRegister
    kind: str
    description: str
    state_vector: Dict[str, complex]


def create_bell_state(kind: str = "phi+",
                      rng: Optional[np.random.Generator] = None) -> BellState:
    """
    Prepare one of the four Bell states on a fresh 2-qubit register.

    Args:
        kind: One of 'phi+', 'phi-', 'psi+', 'psi-'
        rng: Random source for later measurements of the register

    Returns:
        BellState with the register, the kind, a ket description and the
        state vector at preparation time

    Raises:
        ValueError: If kind is not a Bell state name
    """
    if kind not in BELL_STATES:
        raise ValueError(f"Unknown Bell state '{kind}', expected one of {sorted(BELL_STATES)}")

    register = QuantumRegister(2, rng=rng)
    if kind.startswith("psi"):
        register.apply_gate(X_gate, 1)
    register.apply_gate(H_gate, 0)
    register.apply_gate(CNOT_gate, 0, 1)
    if kind.endswith("-"):
        register.apply_gate(Z_gate, 0)
    register.entangled = True

    return BellState(
        register=register,
        kind=kind,
        description=BELL_STATES[kind],
        state_vector=register.get_state_vector(),
    )


def create_ghz_state(n: int, rng: Optional[np.random.Generator] = None) -> QuantumRegister:
    """GHZ state (|0...0⟩ + |1...1⟩)/√2 on a fresh n-qubit register."""
    register = QuantumRegister(n, rng=rng)
    register.apply_gate(H_gate, 0)
    for i in range(1, n):
        register.apply_gate(CNOT_gate, 0, i)
    register.entangled = n > 1
    return register
