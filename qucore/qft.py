"""
Quantum Fourier Transform (QFT) implementation.

The QFT is the quantum analog of the discrete Fourier transform and is a key
component of many quantum algorithms including Shor's factoring algorithm
and quantum phase estimation.
"""

import numpy as np
from typing import List, Optional, Sequence

from .core import QuantumRegister
from .gates import H_gate, SWAP_gate, CP_gate


def _targets(register: QuantumRegister, targets: Optional[Sequence[int]]) -> List[int]:
    if targets is None:
        return list(range(register.num_qubits))
    return list(targets)


def QFT(register: QuantumRegister, targets: Optional[Sequence[int]] = None,
        verbose: bool = False):
    """
    Quantum Fourier Transform on qubits of a register.

    The QFT transforms the computational basis states as:
    |j⟩ → (1/√N) Σₖ exp(2πijk/N) |k⟩

    Args:
        register: Register to transform in place
        targets: Qubit indices, ordered from most significant to least
                 significant bit (default: the whole register)
        verbose: If True, print each step
    """
    qubits = _targets(register, targets)
    n = len(qubits)

    if verbose:
        print(f"QFT on {n} qubits: {qubits}")

    # Apply Hadamard and controlled rotations
    for i in range(n):
        register.apply_gate(H_gate, qubits[i])

        if verbose:
            print(f"After H on {qubits[i]}")

        # Controlled phase rotations
        for j in range(i + 1, n):
            # Rotation angle: π/2^(j-i)
            theta = np.pi / (2 ** (j - i))
            register.apply_gate(CP_gate(theta), qubits[j], qubits[i])

            if verbose:
                print(f"After CP(π/{2 ** (j - i)}) controlled by {qubits[j]} on {qubits[i]}")

    # Swap qubits to reverse order
    for i in range(n // 2):
        register.apply_gate(SWAP_gate, qubits[i], qubits[n - 1 - i])
        if verbose:
            print(f"After SWAP({qubits[i]}, {qubits[n - 1 - i]})")

    if verbose:
        print("QFT complete")


def QFT_inverse(register: QuantumRegister, targets: Optional[Sequence[int]] = None,
                verbose: bool = False):
    """
    Inverse Quantum Fourier Transform.

    The inverse QFT is the adjoint of QFT, obtained by reversing the gate
    order and negating the phase angles.

    Args:
        register: Register to transform in place
        targets: Qubit indices, ordered MSB to LSB (default: all)
        verbose: If True, print progress
    """
    qubits = _targets(register, targets)
    n = len(qubits)

    if verbose:
        print(f"Inverse QFT on {n} qubits: {qubits}")

    # First, swap qubits to reverse order (same as forward QFT)
    for i in range(n // 2):
        register.apply_gate(SWAP_gate, qubits[i], qubits[n - 1 - i])

    # Apply gates in reverse order with negated phases
    for i in range(n - 1, -1, -1):
        for j in range(n - 1, i, -1):
            theta = -np.pi / (2 ** (j - i))  # Negative angle for inverse
            register.apply_gate(CP_gate(theta), qubits[j], qubits[i])

        # Hadamard on qubit i (H is its own inverse)
        register.apply_gate(H_gate, qubits[i])

    if verbose:
        print("Inverse QFT complete")


def qft_matrix(n: int) -> np.ndarray:
    """Reference DFT matrix F[k, j] = exp(2πijk/2^n) / √(2^n)."""
    N = 2 ** n
    j, k = np.meshgrid(np.arange(N), np.arange(N))
    return np.exp(2j * np.pi * j * k / N) / np.sqrt(N)
