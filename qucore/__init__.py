"""
qucore - A small quantum circuit simulator in Python.

This package provides a state-vector simulator for quantum registers,
a library of gates, a circuit executor, and implementations of
fundamental quantum algorithms and error-correcting codes.

Modules:
    gates             - Quantum gate definitions (H, X, Y, Z, CNOT, SWAP, etc.)
    core              - Qubit and QuantumRegister
    states            - Bell and GHZ state preparation
    circuit           - QuantumCircuit executor
    qft               - Quantum Fourier Transform
    grover            - Grover's search algorithm
    shor              - Shor's factoring algorithm
    error_correction  - Bit-flip, phase-flip and Shor 9-qubit codes
    utils             - Utility functions (gcd, bit conversion, state comparison)

Quick Start:
    >>> from qucore import *
    >>> reg = QuantumRegister(1)
    >>> reg.apply_gate(H_gate, 0)
    >>> print(reg.measure())  # [0] or [1] with 50% probability each
"""

# Core functionality
from .core import (
    Qubit,
    QuantumRegister,
    DimensionMismatchError,
    MAX_QUBITS,
    MAX_DENSITY_QUBITS,
)

# Gates
from .gates import (
    # Single-qubit gates
    X_gate,
    Y_gate,
    Z_gate,
    H_gate,
    S_gate,
    T_gate,
    Tinv_gate,
    I_gate,
    P_gate,
    Rx_gate,
    Ry_gate,
    Rz_gate,
    # Two-qubit gates
    CNOT_gate,
    CZ_gate,
    SWAP_gate,
    CP_gate,
    # Three-qubit and n-qubit gates
    TOFF_gate,
    MCZ_gate,
    controlled,
    get_gate,
    gate_names,
)

# States
from .states import (
    BellState,
    create_bell_state,
    create_ghz_state,
)

# Circuit
from .circuit import QuantumCircuit

# QFT
from .qft import (
    QFT,
    QFT_inverse,
    qft_matrix,
)

# Utilities
from .utils import (
    allclose_up_to_global_phase,
    state_fidelity,
    is_unitary,
    gcd,
    is_coprime,
    int_to_bits,
    bits_to_int,
    basis_label,
)

# Algorithms
from .grover import (
    GroverResult,
    grover_search,
    grover_iterations,
    phase_oracle,
    diffusion_operator,
    success_probability,
)

from .shor import (
    ShorResult,
    shor_factor,
    shor_factor_multiple_runs,
    estimate_period,
    refine_period,
    find_factors,
    register_sizes,
    modular_multiplication_matrix,
    controlled_modular_multiplication,
)

# Error correction
from .error_correction import (
    encode_bit_flip,
    decode_bit_flip,
    correct_bit_flip,
    encode_phase_flip,
    decode_phase_flip,
    correct_phase_flip,
    encode_shor,
    decode_shor,
    inject_bit_flip,
    inject_phase_flip,
)

__version__ = "0.1.0"
__all__ = [
    # Core
    "Qubit",
    "QuantumRegister",
    "DimensionMismatchError",
    "MAX_QUBITS",
    "MAX_DENSITY_QUBITS",
    # Gates
    "X_gate",
    "Y_gate",
    "Z_gate",
    "H_gate",
    "S_gate",
    "T_gate",
    "Tinv_gate",
    "I_gate",
    "P_gate",
    "Rx_gate",
    "Ry_gate",
    "Rz_gate",
    "CNOT_gate",
    "CZ_gate",
    "SWAP_gate",
    "CP_gate",
    "TOFF_gate",
    "MCZ_gate",
    "controlled",
    "get_gate",
    "gate_names",
    # States
    "BellState",
    "create_bell_state",
    "create_ghz_state",
    # Circuit
    "QuantumCircuit",
    # QFT
    "QFT",
    "QFT_inverse",
    "qft_matrix",
    # Utils
    "allclose_up_to_global_phase",
    "state_fidelity",
    "is_unitary",
    "gcd",
    "is_coprime",
    "int_to_bits",
    "bits_to_int",
    "basis_label",
    # Grover
    "GroverResult",
    "grover_search",
    "grover_iterations",
    "phase_oracle",
    "diffusion_operator",
    "success_probability",
    # Shor
    "ShorResult",
    "shor_factor",
    "shor_factor_multiple_runs",
    "estimate_period",
    "refine_period",
    "find_factors",
    "register_sizes",
    "modular_multiplication_matrix",
    "controlled_modular_multiplication",
    # Error correction
    "encode_bit_flip",
    "decode_bit_flip",
    "correct_bit_flip",
    "encode_phase_flip",
    "decode_phase_flip",
    "correct_phase_flip",
    "encode_shor",
    "decode_shor",
    "inject_bit_flip",
    "inject_phase_flip",
]
