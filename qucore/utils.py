"""
Utility functions for quantum computing.

This module provides helper functions for:
- Quantum state comparison (accounting for global phase)
- Gate sanity checks (unitarity)
- Classical number theory (GCD, coprimality)
- Conversions between integers, bit lists and basis labels
"""

import numpy as np
from typing import List


# =============================================================================
# Quantum state utilities
# =============================================================================

def allclose_up_to_global_phase(v, w, atol: float = 1e-9) -> bool:
    """
    Check if two quantum states are equal up to a global phase.

    This is the correct way to compare quantum states since global phase
    has no physical significance. Using np.abs() is incorrect for phase-
    sensitive gates like controlled-phase.

    Args:
        v: First quantum state (array-like)
        w: Second quantum state (array-like)
        atol: Absolute tolerance for comparison

    Returns:
        True if states are equal up to global phase
    """
    v = np.asarray(v).reshape(-1)
    w = np.asarray(w).reshape(-1)

    # Find a stable pivot amplitude in w
    idx = np.argmax(np.abs(w))
    if np.abs(w[idx]) < atol:
        # Both should be ~0 vectors; fallback to direct comparison
        return np.allclose(v, w, atol=atol)

    phase = v[idx] / w[idx]
    return np.allclose(v, phase * w, atol=atol)


def state_fidelity(v, w) -> float:
    """
    Compute the fidelity between two pure quantum states.

    Fidelity F = |⟨v|w⟩|² ranges from 0 (orthogonal) to 1 (identical).
    """
    v = np.asarray(v).reshape(-1)
    w = np.asarray(w).reshape(-1)
    return float(np.abs(np.vdot(v, w)) ** 2)


def is_unitary(matrix, atol: float = 1e-10) -> bool:
    """Return True if matrix is square and M†M = I within atol."""
    m = np.asarray(matrix, dtype=complex)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        return False
    return np.allclose(m.conj().T @ m, np.eye(m.shape[0]), atol=atol)


# =============================================================================
# Number theory utilities
# =============================================================================

def gcd(a: int, b: int) -> int:
    """
    Greatest common divisor using Euclidean algorithm.

    Args:
        a, b: Integers

    Returns:
        GCD of a and b (non-negative)
    """
    while b:
        a, b = b, a % b
    return abs(a)


def is_coprime(a: int, N: int) -> bool:
    """
    Check if a and N are coprime (share no common factors).

    Args:
        a, N: Integers to check

    Returns:
        True if gcd(a, N) == 1
    """
    return gcd(a, N) == 1


# =============================================================================
# Binary utilities
# =============================================================================

def int_to_bits(x: int, n: int) -> List[int]:
    """
    Convert integer to list of bits (MSB first).

    Qubit 0 of a register is the most significant bit, so
    int_to_bits(index, n)[i] is the value of qubit i in basis state index.

    Args:
        x: Integer to convert
        n: Number of bits

    Returns:
        List of n bits, MSB first
    """
    return [(x >> (n - 1 - i)) & 1 for i in range(n)]


def bits_to_int(bits: List[int]) -> int:
    """
    Convert list of bits (MSB first) to integer.

    Args:
        bits: List of bits, MSB first

    Returns:
        Integer value
    """
    result = 0
    for bit in bits:
        result = result * 2 + int(bit)
    return result


def basis_label(index: int, n: int) -> str:
    """Ket label of a basis state, e.g. basis_label(5, 3) == '|101⟩'."""
    return "|" + format(index, f"0{n}b") + "⟩"
