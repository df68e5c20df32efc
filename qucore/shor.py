"""
Shor's factoring algorithm implementation.

Shor's algorithm factors integers in polynomial time on a quantum computer,
which would break RSA encryption. The algorithm uses quantum phase estimation
to find the period r of f(x) = a^x mod N, then derives factors classically:

1. Put a control register of t = ⌈log2(N²)⌉ qubits into uniform superposition
2. Initialize a work register of ⌈log2 N⌉ qubits to |1⟩
3. Apply controlled multiplications by a^(2^k) mod N (modular exponentiation)
4. Apply the inverse QFT to the control register and measure it
5. Estimate r from the measured fraction m / 2^t
6. If r is even, gcd(a^(r/2) ± 1, N) gives the factors

Failures of the probabilistic steps (odd period, trivial factors) are
normal outcomes and are reported in the result's error field.
"""

import math
import numpy as np
from typing import NamedTuple, Optional, Tuple

from .core import QuantumRegister, MAX_QUBITS
from .gates import H_gate, X_gate, controlled
from .qft import QFT_inverse
from .utils import gcd, is_coprime, bits_to_int

# Largest denominator tried by estimate_period
MAX_PERIOD = 100


class ShorResult(NamedTuple):
    N: int
    a: int
    measured_value: Optional[int]
    estimated_period: Optional[int]
    factors: Optional[Tuple[int, int]]
    error: Optional[str] = None


# =============================================================================
# Classical post-processing
# =============================================================================

def estimate_period(measured_value: int, num_bits: int, max_period: int = MAX_PERIOD) -> int:
    """
    Estimate the period r from a phase-estimation measurement.

    The measurement m of a t-bit control register approximates s/r · 2^t
    for some integer s. This searches every candidate denominator
    r in [1, max_period] for the one whose closest fraction k/r is nearest
    to m / 2^t. Ties go to the smaller r.

    When m = k · 2^t / r exactly with gcd(k, r) = 1, r is recovered exactly.

    Args:
        measured_value: Measured integer m
        num_bits: Number of bits t in the control register
        max_period: Largest denominator to try

    Returns:
        The best candidate r (1 if m = 0)
    """
    fraction = measured_value / (2 ** num_bits)

    best_period = 1
    best_error = 1.0
    for r in range(1, max_period + 1):
        error = abs(fraction - round(fraction * r) / r)
        if error < best_error - 1e-12:
            best_error = error
            best_period = r
    return best_period


def refine_period(r: int, a: int, N: int) -> int:
    """
    Lift a period candidate to a true period of a^x mod N.

    If s and r share a factor, the measured fraction s/r reduces and the
    estimate is a divisor of the true period. Try multiples of r below N.

    Returns:
        Smallest multiple r' of r with a^r' ≡ 1 (mod N), or r unchanged
        if there is none below N
    """
    candidate = r
    while candidate < N:
        if pow(a, candidate, N) == 1:
            return candidate
        candidate += r
    return r


def find_factors(N: int, a: int, period: int) -> Tuple[Optional[Tuple[int, int]], Optional[str]]:
    """
    Recover factors of N from a period of a^x mod N.

    Returns:
        ((factor1, factor2), None) on success, or (None, error message)
    """
    if period % 2 != 0:
        return None, "period is odd, retry with different a"

    x = pow(a, period // 2, N)
    factor1 = gcd(x - 1, N)
    factor2 = gcd(x + 1, N)

    if factor1 in (1, N) or factor2 in (1, N):
        return None, "trivial factors, retry with different a"

    return (min(factor1, factor2), max(factor1, factor2)), None


# =============================================================================
# Quantum period finding
# =============================================================================

def register_sizes(N: int) -> Tuple[int, int]:
    """
    Register sizes for factoring N.

    Returns:
        Tuple (control_size, work_size) where
        - control_size = ⌈log2(N²)⌉ so that 2^t ≥ N² (phase precision)
        - work_size = ⌈log2 N⌉ bits to hold values 0..N-1
    """
    control_size = math.ceil(math.log2(N * N))
    work_size = math.ceil(math.log2(N))
    return (control_size, work_size)


def modular_multiplication_matrix(multiplier: int, N: int, num_bits: int) -> np.ndarray:
    """
    Permutation matrix of |x⟩ → |multiplier·x mod N⟩ on num_bits qubits.

    Values x ≥ N are left unchanged so the map stays a permutation.
    multiplier must be coprime to N.
    """
    dim = 2 ** num_bits
    U = np.zeros((dim, dim), dtype=complex)
    for x in range(dim):
        y = (multiplier * x) % N if x < N else x
        U[y, x] = 1
    return U


def controlled_modular_multiplication(register: QuantumRegister, control: int,
                                      work: list, multiplier: int, N: int):
    """
    Controlled multiplication by a constant mod N.

    When the control qubit is |1⟩, the work register |x⟩ becomes
    |multiplier·x mod N⟩; otherwise it is unchanged.

    Args:
        register: Register containing control and work qubits
        control: Control qubit index
        work: Work qubit indices, MSB first
        multiplier: Constant coprime to N
        N: Modulus
    """
    U = modular_multiplication_matrix(multiplier, N, len(work))
    register.apply_gate(controlled(U), control, *work)


def shor_factor(
    N: int,
    a: int,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = False
) -> ShorResult:
    """
    Run Shor's algorithm once to factor N with base a.

    Args:
        N: Number to factor (composite, odd)
        a: Base, 2 <= a < N, coprime to N
        rng: Random source for the measurement
        verbose: If True, print detailed progress

    Returns:
        ShorResult. On success factors holds (p, q) with p * q == N.
        Invalid input and probabilistic failures are described in error.

    Raises:
        ValueError: If N needs more than MAX_QUBITS qubits to simulate
    """
    if N < 3:
        return ShorResult(N, a, None, None, None, error=f"N must be >= 3, got {N}")
    if not 2 <= a < N:
        return ShorResult(N, a, None, None, None, error=f"a must be in [2, {N - 1}], got {a}")
    if not is_coprime(a, N):
        return ShorResult(N, a, None, None, None,
                          error=f"a={a} is not coprime to N={N} (gcd {gcd(a, N)}), retry with different a")

    n_control, n_work = register_sizes(N)
    total = n_control + n_work
    if total > MAX_QUBITS:
        raise ValueError(
            f"Factoring N={N} needs {total} qubits, more than MAX_QUBITS={MAX_QUBITS}"
        )

    if verbose:
        print(f"Shor's Algorithm: Factoring N={N} with a={a}")
        print(f"Using {n_control} control qubits and {n_work} work qubits")

    register = QuantumRegister(total, rng=rng)
    control = list(range(n_control))
    work = list(range(n_control, total))

    # Control register in superposition, work register = |1⟩ (LSB is last)
    for q in control:
        register.apply_gate(H_gate, q)
    register.apply_gate(X_gate, work[-1])

    # Control qubit i has weight 2^(t-1-i) and controls ×a^(2^(t-1-i))
    for i, q in enumerate(control):
        power = n_control - 1 - i
        multiplier = pow(a, 2 ** power, N)
        if multiplier == 1:
            if verbose:
                print(f"  C{i}: ×{a}^{2 ** power} mod {N} = ×1 (identity, skipped)")
            continue
        if verbose:
            print(f"  C{i}: controlled ×{multiplier} mod {N} (= ×{a}^{2 ** power})")
        controlled_modular_multiplication(register, q, work, multiplier, N)

    QFT_inverse(register, control)

    bits = register.measure()
    measured_value = bits_to_int(bits[:n_control])

    if verbose:
        print(f"Measurement result: {measured_value} "
              f"(phase ≈ {measured_value}/{2 ** n_control} = {measured_value / 2 ** n_control})")

    # The order of a mod N is always below N
    period = estimate_period(measured_value, n_control, max_period=min(MAX_PERIOD, N - 1))
    if period > 1:
        period = refine_period(period, a, N)

    if verbose:
        print(f"Extracted period candidate: r = {period}")

    factors, error = find_factors(N, a, period)

    if verbose:
        if factors is not None:
            x = pow(a, period // 2, N)
            print(f"  a^(r/2) mod N = {a}^{period // 2} mod {N} = {x}")
            print(f"  gcd({x} - 1, {N}) and gcd({x} + 1, {N}) give {factors[0]} × {factors[1]} = {N}")
        else:
            print(f"Failed: {error}")

    return ShorResult(N, a, measured_value, period, factors, error)


def shor_factor_multiple_runs(
    N: int,
    a: Optional[int] = None,
    num_runs: int = 10,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = False
) -> ShorResult:
    """
    Run Shor's algorithm until factors are found.

    Since Shor's algorithm is probabilistic, multiple runs may be needed.
    When a is None a random base coprime to N is drawn for each run.

    Returns:
        The first successful ShorResult, or the last failed one
    """
    if num_runs < 1:
        raise ValueError(f"num_runs must be >= 1, got {num_runs}")

    rng = rng if rng is not None else np.random.default_rng()
    candidates = [x for x in range(2, N) if is_coprime(x, N)]
    if a is None and not candidates:
        return ShorResult(N, 0, None, None, None, error=f"no base coprime to N={N}")

    for run in range(num_runs):
        base = a if a is not None else int(rng.choice(candidates))
        if verbose:
            print(f"Run {run + 1}/{num_runs} with a={base}")

        result = shor_factor(N, base, rng=rng, verbose=verbose)
        if result.factors is not None:
            if verbose:
                print(f"Success on run {run + 1}!")
            return result
        if result.measured_value is None:
            # Invalid input, retrying with the same base cannot help
            return result

    if verbose:
        print(f"Failed to find factors in {num_runs} runs")
    return result
