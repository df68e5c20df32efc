"""
Core quantum simulation functionality.

This module provides the two state containers of the simulator:

    Qubit            - a single qubit, two complex amplitudes (alpha, beta)
    QuantumRegister  - n qubits held as one joint state vector of 2^n
                       complex amplitudes

The register stores the full joint state, not one amplitude pair per qubit,
so multi-qubit gates (CNOT, Toffoli, controlled phases) and entanglement are
simulated exactly. Qubit 0 is the most significant bit of every basis index:
for 3 qubits, basis state |011⟩ has index 3 and qubit 0 is in |0⟩.

Measurement is the only source of randomness. Every stochastic operation
accepts a numpy Generator so that results can be reproduced.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence

from .utils import basis_label, int_to_bits

# Largest register we are willing to allocate (2^20 amplitudes = 16 MiB)
MAX_QUBITS = 20

# Largest register whose density matrix we build (4^10 entries = 16 MiB)
MAX_DENSITY_QUBITS = 10

# Tolerance for normalization and separability checks
ATOL = 1e-10


class DimensionMismatchError(ValueError):
    """A gate matrix does not match the number of target qubits."""


def _as_gate(gate, num_targets: int) -> np.ndarray:
    """Validate that gate is a 2^k x 2^k matrix for k = num_targets."""
    matrix = np.asarray(gate, dtype=complex)
    dim = 2 ** num_targets
    if matrix.shape != (dim, dim):
        raise DimensionMismatchError(
            f"Gate of shape {matrix.shape} cannot act on {num_targets} "
            f"qubit(s); expected ({dim}, {dim})"
        )
    return matrix


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


# =============================================================================
# Single qubit
# =============================================================================

class Qubit:
    """
    A single qubit α|0⟩ + β|1⟩.

    Amplitudes are normalized on construction and after every gate.
    Measurement collapses the qubit: once measured, it stays in the observed
    basis state, so measuring again returns the same bit.
    """

    def __init__(self, alpha: complex = 1, beta: complex = 0):
        self.alpha = complex(alpha)
        self.beta = complex(beta)
        if abs(self.alpha) ** 2 + abs(self.beta) ** 2 < ATOL:
            raise ValueError("Qubit amplitudes cannot both be zero")
        self.normalize()

    @property
    def amplitudes(self) -> np.ndarray:
        """Amplitudes as an array [alpha, beta]."""
        return np.array([self.alpha, self.beta], dtype=complex)

    def normalize(self):
        """Rescale so that |alpha|² + |beta|² = 1. No-op for a zero vector."""
        magnitude = np.sqrt(abs(self.alpha) ** 2 + abs(self.beta) ** 2)
        if magnitude > 0:
            self.alpha /= magnitude
            self.beta /= magnitude

    def apply_gate(self, gate):
        """
        Apply a 2x2 gate matrix to this qubit.

        Raises:
            DimensionMismatchError: If gate is not 2x2 (qubit unchanged)
        """
        m = _as_gate(gate, 1)
        alpha = m[0, 0] * self.alpha + m[0, 1] * self.beta
        beta = m[1, 0] * self.alpha + m[1, 1] * self.beta
        self.alpha, self.beta = complex(alpha), complex(beta)
        self.normalize()

    def get_probabilities(self) -> Dict[str, float]:
        """Probabilities of measuring |0⟩ and |1⟩."""
        p0 = abs(self.alpha) ** 2
        p1 = abs(self.beta) ** 2
        total = p0 + p1
        return {"|0⟩": p0 / total, "|1⟩": p1 / total}

    def measure(self, rng: Optional[np.random.Generator] = None) -> int:
        """
        Measure in the computational basis and collapse.

        Args:
            rng: Random source (default: a fresh numpy Generator)

        Returns:
            0 with probability |alpha|², else 1
        """
        p0 = self.get_probabilities()["|0⟩"]
        bit = 0 if _rng(rng).random() < p0 else 1
        if bit == 0:
            self.alpha, self.beta = 1 + 0j, 0j
        else:
            self.alpha, self.beta = 0j, 1 + 0j
        return bit

    def clone(self) -> "Qubit":
        """Independent copy of this qubit."""
        return Qubit(self.alpha, self.beta)

    def __repr__(self):
        return f"Qubit(alpha={self.alpha:.4g}, beta={self.beta:.4g})"


# =============================================================================
# Register
# =============================================================================

class QuantumRegister:
    """
    An n-qubit register holding the joint state vector.

    Args:
        num_qubits: Number of qubits (1 to MAX_QUBITS)
        rng: Random source used by measurements (default: fresh Generator)

    Raises:
        ValueError: If num_qubits is out of range
    """

    def __init__(self, num_qubits: int, rng: Optional[np.random.Generator] = None):
        if not 1 <= num_qubits <= MAX_QUBITS:
            raise ValueError(
                f"num_qubits must be in [1, {MAX_QUBITS}], got {num_qubits}"
            )
        self.num_qubits = num_qubits
        self.rng = _rng(rng)
        self.entangled = False
        self.state = np.zeros(2 ** num_qubits, dtype=complex)
        self.state[0] = 1.0

    @classmethod
    def from_qubits(cls, qubits: Sequence[Qubit],
                    rng: Optional[np.random.Generator] = None) -> "QuantumRegister":
        """
        Build a register in the product state of the given qubits.

        qubits[0] becomes qubit 0 (most significant bit).
        """
        register = cls(len(qubits), rng=rng)
        state = np.array([1.0 + 0j])
        for qubit in qubits:
            state = np.kron(state, qubit.amplitudes)
        register.state = state / np.linalg.norm(state)
        return register

    # -------------------------------------------------------------------------
    # Reading the state
    # -------------------------------------------------------------------------

    def get_state(self) -> np.ndarray:
        """Return a copy of the state as a flat vector of 2^n amplitudes."""
        return self.state.copy()

    def get_state_vector(self) -> Dict[str, complex]:
        """Map each basis label ('|010⟩') to its amplitude, in index order."""
        n = self.num_qubits
        return {basis_label(i, n): complex(amp) for i, amp in enumerate(self.state)}

    def get_probabilities(self) -> Dict[str, float]:
        """Map each basis label to its measurement probability."""
        n = self.num_qubits
        probs = np.abs(self.state) ** 2
        return {basis_label(i, n): float(p) for i, p in enumerate(probs)}

    def get_density_matrix(self) -> np.ndarray:
        """
        Density matrix ρ = |ψ⟩⟨ψ| with ρ[i, j] = ψ_i · conj(ψ_j).

        Raises:
            ValueError: If the register has more than MAX_DENSITY_QUBITS qubits
        """
        if self.num_qubits > MAX_DENSITY_QUBITS:
            raise ValueError(
                f"Density matrix of {self.num_qubits} qubits has 4^{self.num_qubits} "
                f"entries, more than MAX_DENSITY_QUBITS={MAX_DENSITY_QUBITS} allows"
            )
        return np.outer(self.state, self.state.conj())

    def extract_qubit(self, index: int) -> Qubit:
        """
        Return the state of one qubit that is not entangled with the others.

        The result is exact up to a global phase.

        Raises:
            IndexError: If index is out of range
            ValueError: If the qubit is entangled with the rest of the register
        """
        self._check_targets([index])
        psi = np.moveaxis(self.state.reshape([2] * self.num_qubits), index, 0)
        psi = psi.reshape(2, -1)

        # Separable iff psi = q ⊗ rest, i.e. the 2 x 2^(n-1) matrix has rank 1
        col = np.argmax(np.linalg.norm(psi, axis=0))
        q = psi[:, col] / np.linalg.norm(psi[:, col])
        residual = psi - np.outer(q, q.conj() @ psi)
        if np.linalg.norm(residual) > ATOL:
            raise ValueError(f"Qubit {index} is entangled with the register")
        return Qubit(q[0], q[1])

    # -------------------------------------------------------------------------
    # Gates
    # -------------------------------------------------------------------------

    def _check_targets(self, targets: Sequence[int]):
        for t in targets:
            if not 0 <= t < self.num_qubits:
                raise IndexError(
                    f"Qubit index {t} out of range for {self.num_qubits}-qubit register"
                )
        if len(targets) != len(set(targets)):
            raise ValueError("The same qubit cannot occur twice as an argument")

    def _apply(self, matrix: np.ndarray, targets: Sequence[int]):
        # Move the target axes to the front, multiply, move them back
        k = len(targets)
        psi = self.state.reshape([2] * self.num_qubits)
        psi = np.moveaxis(psi, list(targets), list(range(k)))
        shape = psi.shape
        psi = (matrix @ psi.reshape(2 ** k, -1)).reshape(shape)
        psi = np.moveaxis(psi, list(range(k)), list(targets))
        self.state = psi.reshape(-1)

    def apply_gate(self, gate, *targets: int):
        """
        Apply a gate to the given qubit(s).

        Args:
            gate: 2^k x 2^k matrix (2x2 for one qubit, 4x4 for two, ...)
            *targets: k distinct qubit indices, in the gate's bit order

        Raises:
            IndexError: If a target is out of range
            ValueError: If targets repeat
            DimensionMismatchError: If the gate size does not match k
        """
        if not targets:
            raise ValueError("apply_gate needs at least one target qubit")
        self._check_targets(targets)
        matrix = _as_gate(gate, len(targets))
        self._apply(matrix, targets)

    def apply_multi_qubit_gate(self, gates: Sequence, targets: Sequence[int]):
        """
        Apply one single-qubit gate per target, in order.

        gates[i] acts on targets[i]. Everything is validated before the
        state is touched.
        """
        if len(gates) != len(targets):
            raise DimensionMismatchError(
                f"{len(gates)} gate(s) given for {len(targets)} target(s)"
            )
        for t in targets:
            self._check_targets([t])
        matrices = [_as_gate(g, 1) for g in gates]
        for matrix, target in zip(matrices, targets):
            self._apply(matrix, [target])

    def entangle(self, qubit1: int, qubit2: int):
        """
        Entangle two qubits with a Hadamard on qubit1 followed by CNOT.

        Starting from |00⟩ on the pair this gives (|00⟩ + |11⟩)/√2, whose
        measurement outcomes always agree.
        """
        from .gates import H_gate, CNOT_gate

        self._check_targets([qubit1, qubit2])
        self._apply(H_gate, [qubit1])
        self._apply(CNOT_gate, [qubit1, qubit2])
        self.entangled = True

    # -------------------------------------------------------------------------
    # Measurement
    # -------------------------------------------------------------------------

    def measure(self, rng: Optional[np.random.Generator] = None) -> List[int]:
        """
        Measure every qubit and collapse the register.

        Returns:
            Measured bits, qubit 0 first
        """
        rng = rng if rng is not None else self.rng
        probs = np.abs(self.state) ** 2
        index = int(rng.choice(len(probs), p=probs / probs.sum()))
        self.state = np.zeros_like(self.state)
        self.state[index] = 1.0
        return int_to_bits(index, self.num_qubits)

    def measure_qubit(self, index: int, rng: Optional[np.random.Generator] = None) -> int:
        """
        Measure one qubit and collapse the joint state accordingly.

        The qubit stays in the register in the observed basis state.
        """
        self._check_targets([index])
        rng = rng if rng is not None else self.rng

        psi = np.moveaxis(self.state.reshape([2] * self.num_qubits), index, 0)
        prob = np.linalg.norm(psi.reshape(2, -1), axis=1) ** 2
        prob = prob / prob.sum()
        bit = int(rng.choice(2, p=prob))

        psi = psi.copy()
        psi[1 - bit] = 0
        psi = psi / np.sqrt(prob[bit])
        self.state = np.moveaxis(psi, 0, index).reshape(-1)
        return bit

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def reset(self):
        """Return every qubit to |0⟩ and clear the entangled flag."""
        self.state = np.zeros(2 ** self.num_qubits, dtype=complex)
        self.state[0] = 1.0
        self.entangled = False

    def copy(self) -> "QuantumRegister":
        """Independent copy sharing only the random source."""
        other = QuantumRegister(self.num_qubits, rng=self.rng)
        other.state = self.state.copy()
        other.entangled = self.entangled
        return other

    def __repr__(self):
        return f"QuantumRegister(num_qubits={self.num_qubits})"
