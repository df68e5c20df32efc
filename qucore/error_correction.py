"""
Quantum error-correcting codes.

Three codes are provided, each as an encoder from one logical Qubit to a
physical QuantumRegister and a decoder back to a Qubit:

    bit flip    α|0⟩ + β|1⟩ → α|000⟩ + β|111⟩        corrects one X error
    phase flip  α|0⟩ + β|1⟩ → α|+++⟩ + β|−−−⟩        corrects one Z error
    Shor        bit-flip code nested inside the      corrects one X, Y or Z
                phase-flip code on 9 qubits           error on any qubit

The decode_* functions for the 3-qubit codes read the block out by
measurement and a majority vote, which returns a basis state. The
correct_* and decode_shor functions run the encoder in reverse followed by
a Toffoli majority vote, which repairs the error without measuring and so
keeps superpositions intact.
"""

import numpy as np
from typing import Optional

from .core import Qubit, QuantumRegister
from .gates import H_gate, X_gate, Z_gate, CNOT_gate, TOFF_gate


def inject_bit_flip(register: QuantumRegister, index: int):
    """Simulate a bit-flip error (X) on one physical qubit."""
    register.apply_gate(X_gate, index)


def inject_phase_flip(register: QuantumRegister, index: int):
    """Simulate a phase-flip error (Z) on one physical qubit."""
    register.apply_gate(Z_gate, index)


def _majority_qubit(bits) -> Qubit:
    bit = 1 if sum(bits) >= 2 else 0
    return Qubit(1 - bit, bit)


def _majority_correct(register: QuantumRegister, a: int, b: int, c: int):
    # Inverse of the repetition encoder, then flip a if b and c disagree with it
    register.apply_gate(CNOT_gate, a, b)
    register.apply_gate(CNOT_gate, a, c)
    register.apply_gate(TOFF_gate, b, c, a)


# =============================================================================
# Bit-flip code
# =============================================================================

def encode_bit_flip(qubit: Qubit, rng: Optional[np.random.Generator] = None) -> QuantumRegister:
    """Encode a qubit into 3 physical qubits: α|000⟩ + β|111⟩."""
    register = QuantumRegister.from_qubits([qubit, Qubit(), Qubit()], rng=rng)
    register.apply_gate(CNOT_gate, 0, 1)
    register.apply_gate(CNOT_gate, 0, 2)
    return register


def decode_bit_flip(register: QuantumRegister, rng: Optional[np.random.Generator] = None) -> Qubit:
    """
    Measure the three physical qubits and return the majority bit.

    The register is collapsed by the measurement. The returned qubit is
    |0⟩ or |1⟩.
    """
    return _majority_qubit(register.measure(rng))


def correct_bit_flip(register: QuantumRegister) -> Qubit:
    """Undo a single bit flip and return the logical qubit, superposition intact."""
    _majority_correct(register, 0, 1, 2)
    return register.extract_qubit(0)


# =============================================================================
# Phase-flip code
# =============================================================================

def encode_phase_flip(qubit: Qubit, rng: Optional[np.random.Generator] = None) -> QuantumRegister:
    """Encode a qubit into 3 physical qubits: α|+++⟩ + β|−−−⟩."""
    register = encode_bit_flip(qubit, rng=rng)
    for q in range(3):
        register.apply_gate(H_gate, q)
    return register


def decode_phase_flip(register: QuantumRegister, rng: Optional[np.random.Generator] = None) -> Qubit:
    """Rotate back to the computational basis, measure, and majority-vote."""
    for q in range(3):
        register.apply_gate(H_gate, q)
    return decode_bit_flip(register, rng)


def correct_phase_flip(register: QuantumRegister) -> Qubit:
    """Undo a single phase flip and return the logical qubit."""
    for q in range(3):
        register.apply_gate(H_gate, q)
    return correct_bit_flip(register)


# =============================================================================
# Shor 9-qubit code
# =============================================================================

BLOCKS = (0, 3, 6)


def encode_shor(qubit: Qubit, rng: Optional[np.random.Generator] = None) -> QuantumRegister:
    """
    Encode a qubit into the 9-qubit Shor code.

    Phase-flip encoding across qubits 0, 3 and 6, then bit-flip encoding
    of each of those into its block of three.
    """
    register = QuantumRegister.from_qubits([qubit] + [Qubit() for _ in range(8)], rng=rng)

    register.apply_gate(CNOT_gate, 0, 3)
    register.apply_gate(CNOT_gate, 0, 6)
    for b in BLOCKS:
        register.apply_gate(H_gate, b)

    for b in BLOCKS:
        register.apply_gate(CNOT_gate, b, b + 1)
        register.apply_gate(CNOT_gate, b, b + 2)
    return register


def decode_shor(register: QuantumRegister) -> Qubit:
    """
    Decode the 9-qubit Shor code, correcting one X, Y or Z error.

    Mirrors encode_shor: bit-flip correction inside each block, Hadamards
    on the block heads, then phase-level majority correction into qubit 0.
    """
    for b in BLOCKS:
        _majority_correct(register, b, b + 1, b + 2)
    for b in BLOCKS:
        register.apply_gate(H_gate, b)
    _majority_correct(register, 0, 3, 6)
    return register.extract_qubit(0)
