"""
Grover's search algorithm implementation.

Grover's algorithm provides quadratic speedup for unstructured search problems.
Given a function f(x) that returns 1 for exactly one value x* (the "needle"),
Grover's algorithm finds x* in O(√N) evaluations instead of O(N).

Bit ordering convention:
    qubit 0 is the most significant bit. The measured integer is
    result = sum(bit[i] * 2^(n-1-i) for i in range(n)), so the bit string
    read from qubit 0 to qubit n-1 is the binary index.
"""

import math
import numpy as np
from typing import Any, NamedTuple, Optional, Sequence

from .core import QuantumRegister
from .gates import H_gate, X_gate, MCZ_gate
from .utils import bits_to_int, basis_label


class GroverResult(NamedTuple):
    result: Any
    index: Optional[int]
    iterations: int
    probability: float
    error: Optional[str] = None


def grover_iterations(num_states: int) -> int:
    """Default iteration count ⌊(π/4)·√N⌋ for N basis states."""
    return int(np.pi / 4 * np.sqrt(num_states))


def phase_oracle(register: QuantumRegister, target: int,
                 qubits: Optional[Sequence[int]] = None):
    """
    Phase oracle that marks a single basis state.

    Applies a phase flip (-1) to |target⟩ only: X on every qubit whose bit
    in target is 0, multi-controlled Z over all qubits, then undo the X gates.

    Args:
        register: Register to act on
        target: Basis index to mark (0 to 2^n - 1)
        qubits: Qubit indices forming the search register (default: all)

    Raises:
        ValueError: If target is out of range
    """
    qubits = list(range(register.num_qubits)) if qubits is None else list(qubits)
    n = len(qubits)
    if not (0 <= target < 2 ** n):
        raise ValueError(f"target must be in [0, {2**n - 1}], got {target}")

    zero_bits = [q for i, q in enumerate(qubits) if not (target >> (n - 1 - i)) & 1]
    for q in zero_bits:
        register.apply_gate(X_gate, q)
    register.apply_gate(MCZ_gate(n), *qubits)
    for q in zero_bits:
        register.apply_gate(X_gate, q)


def diffusion_operator(register: QuantumRegister, qubits: Optional[Sequence[int]] = None):
    """
    Grover diffusion operator (inversion about average).

    D = 2|ψ⟩⟨ψ| - I where |ψ⟩ is the uniform superposition, implemented
    (up to global phase) as H⊗n · X⊗n · MCZ · X⊗n · H⊗n.
    """
    qubits = list(range(register.num_qubits)) if qubits is None else list(qubits)

    for q in qubits:
        register.apply_gate(H_gate, q)
    for q in qubits:
        register.apply_gate(X_gate, q)

    register.apply_gate(MCZ_gate(len(qubits)), *qubits)

    for q in qubits:
        register.apply_gate(X_gate, q)
    for q in qubits:
        register.apply_gate(H_gate, q)


def grover_search(
    items: Sequence[Any],
    target: Any,
    iterations: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = False
) -> GroverResult:
    """
    Run Grover's search for target among items.

    The items are indexed by the basis states of ⌈log2(len(items))⌉ qubits
    (at least one). Basis states past the end of items are padding and
    map to result None.

    Args:
        items: Collection to search
        target: Item to find; its first position in items is marked
        iterations: Number of Grover iterations (default: ⌊π√N/4⌋ for
                    N = len(items)). 0 measures the uniform superposition.
        rng: Random source for the final measurement
        verbose: If True, print progress

    Returns:
        GroverResult(result, index, iterations, probability, error).
        probability is |⟨target|ψ⟩|² just before measurement. If target is
        not among items, error describes why and nothing is simulated.
    """
    items = list(items)
    if not items:
        return GroverResult(None, None, 0, 0.0, error="items must not be empty")
    if target not in items:
        return GroverResult(None, None, 0, 0.0,
                            error=f"target {target!r} not found in items")
    if iterations is not None and iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")

    target_index = items.index(target)
    n = max(1, math.ceil(math.log2(len(items))))
    N = 2 ** n
    if iterations is None:
        iterations = grover_iterations(len(items))

    if verbose:
        print(f"Grover search on {n} qubits ({len(items)} items, {N} states)")
        print(f"Using {iterations} iterations")

    register = QuantumRegister(n, rng=rng)
    for q in range(n):
        register.apply_gate(H_gate, q)

    for iteration in range(iterations):
        # Oracle: mark the target state
        phase_oracle(register, target_index)

        # Diffusion: inversion about average
        diffusion_operator(register)

        if verbose:
            p = register.get_probabilities()[basis_label(target_index, n)]
            print(f"Iteration {iteration + 1}: P(target) = {p:.4f}")

    probability = register.get_probabilities()[basis_label(target_index, n)]

    bits = register.measure()
    index = bits_to_int(bits)

    if verbose:
        print(f"Measured: {''.join(map(str, bits))} = {index}")

    return GroverResult(
        result=items[index] if index < len(items) else None,
        index=index,
        iterations=iterations,
        probability=probability,
    )


def success_probability(num_states: int, iterations: int) -> float:
    """
    Analytic probability of measuring the marked state.

    sin²((2k + 1)θ) with sin θ = 1/√N, for k iterations over N states.
    """
    theta = np.arcsin(1 / np.sqrt(num_states))
    return float(np.sin((2 * iterations + 1) * theta) ** 2)
