"""
Quantum gate library.

Gates are plain numpy matrices acting on amplitudes in the computational
basis. Single-qubit gates are 2x2, k-qubit gates are 2^k x 2^k with the
first target qubit as the most significant bit of the row index.

Parameterized gates (rotations, phase shifts) are built on demand by the
corresponding ``*_gate`` function. ``get_gate`` resolves gate names for
callers that describe circuits as data.
"""

import numpy as np

# =============================================================================
# Single-qubit gates
# =============================================================================

X_gate = np.array([[0, 1],      # Pauli X gate (NOT gate)
                   [1, 0]], dtype=complex)

Y_gate = np.array([[ 0, -1j],   # Pauli Y gate
                   [1j,   0]])

Z_gate = np.array([[1,  0],     # Pauli Z gate = P(π) = S²
                   [0, -1]], dtype=complex)

H_gate = np.array([[1,  1],     # Hadamard gate
                   [1, -1]], dtype=complex) * np.sqrt(1/2)

S_gate = np.array([[1,  0],     # Phase gate = P(π/2) = T²
                   [0, 1j]])

T_gate = np.array([[1,                   0],   # T gate = P(π/4)
                   [0, np.exp(1j * np.pi / 4)]])

Tinv_gate = np.array([[1,                    0],   # T† gate = P(-π/4)
                      [0, np.exp(-1j * np.pi / 4)]])

I_gate = np.eye(2, dtype=complex)


def P_gate(phi):
    """Phase shift gate P(φ) = diag(1, e^{iφ})"""
    return np.array([[1,              0],
                     [0, np.exp(phi * 1j)]])


def Rx_gate(theta):
    """X rotation gate Rx(θ)"""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c,    -1j * s],
                     [-1j * s,    c]])


def Ry_gate(theta):
    """Y rotation gate Ry(θ)"""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -s],
                     [s,  c]], dtype=complex)


def Rz_gate(theta):
    """Z rotation gate Rz(θ)"""
    return np.array([[np.exp(-1j * theta / 2),                    0],
                     [                      0, np.exp(1j * theta / 2)]])


# =============================================================================
# Two-qubit gates
# =============================================================================

CNOT_gate = np.array([[1, 0, 0, 0],   # Controlled NOT gate (XOR)
                      [0, 1, 0, 0],
                      [0, 0, 0, 1],
                      [0, 0, 1, 0]], dtype=complex)

CZ_gate = np.array([[1, 0, 0,  0],    # Controlled Z gate
                    [0, 1, 0,  0],
                    [0, 0, 1,  0],
                    [0, 0, 0, -1]], dtype=complex)

SWAP_gate = np.array([[1, 0, 0, 0],   # Swap gate
                      [0, 0, 1, 0],
                      [0, 1, 0, 0],
                      [0, 0, 0, 1]], dtype=complex)


def CP_gate(theta):
    """Controlled phase gate CP(θ) = diag(1, 1, 1, e^{iθ})"""
    return np.diag([1, 1, 1, np.exp(1j * theta)])


# =============================================================================
# Three-qubit and n-qubit gates
# =============================================================================

TOFF_gate = np.array([[1, 0, 0, 0, 0, 0, 0, 0],   # Toffoli gate (CCNOT)
                      [0, 1, 0, 0, 0, 0, 0, 0],
                      [0, 0, 1, 0, 0, 0, 0, 0],
                      [0, 0, 0, 1, 0, 0, 0, 0],
                      [0, 0, 0, 0, 1, 0, 0, 0],
                      [0, 0, 0, 0, 0, 1, 0, 0],
                      [0, 0, 0, 0, 0, 0, 0, 1],
                      [0, 0, 0, 0, 0, 0, 1, 0]], dtype=complex)


def MCZ_gate(n: int) -> np.ndarray:
    """
    Multi-controlled Z over n qubits: flips the sign of |1...1⟩ only.

    MCZ_gate(1) is Z, MCZ_gate(2) is CZ.
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    diag = np.ones(2 ** n, dtype=complex)
    diag[-1] = -1
    return np.diag(diag)


def controlled(gate) -> np.ndarray:
    """
    Controlled version of a gate, with the control as the first qubit.

    Returns the block matrix diag(I, gate).
    """
    gate = np.asarray(gate, dtype=complex)
    dim = gate.shape[0]
    result = np.eye(2 * dim, dtype=complex)
    result[dim:, dim:] = gate
    return result


# =============================================================================
# Lookup by name
# =============================================================================

_FIXED_GATES = {
    "I": I_gate,
    "X": X_gate,
    "Y": Y_gate,
    "Z": Z_gate,
    "H": H_gate,
    "S": S_gate,
    "T": T_gate,
    "TDG": Tinv_gate,
    "CNOT": CNOT_gate,
    "CX": CNOT_gate,
    "CZ": CZ_gate,
    "SWAP": SWAP_gate,
    "TOFFOLI": TOFF_gate,
    "CCX": TOFF_gate,
}

_PARAMETERIZED_GATES = {
    "P": (P_gate, "phi"),
    "RX": (Rx_gate, "theta"),
    "RY": (Ry_gate, "theta"),
    "RZ": (Rz_gate, "theta"),
    "CP": (CP_gate, "theta"),
}


def gate_names():
    """Sorted list of names accepted by get_gate."""
    return sorted(list(_FIXED_GATES) + list(_PARAMETERIZED_GATES))


def get_gate(name: str, **params) -> np.ndarray:
    """
    Look up a gate matrix by name.

    Names are case-insensitive. Parameterized gates take their angle as a
    keyword argument (``theta`` for rotations and CP, ``phi`` for P), e.g.
    ``get_gate("RX", theta=np.pi / 2)``.

    Raises:
        ValueError: If the name is unknown or a required angle is missing
    """
    key = name.upper()
    if key in _FIXED_GATES:
        return _FIXED_GATES[key].copy()
    if key in _PARAMETERIZED_GATES:
        factory, param = _PARAMETERIZED_GATES[key]
        if param not in params:
            raise ValueError(f"Gate {name} requires parameter '{param}'")
        return factory(params[param])
    raise ValueError(f"Unknown gate: {name}")
