"""Tests for the bit-flip, phase-flip and Shor error-correcting codes."""

import numpy as np
import pytest

from qucore import (
    Qubit, Y_gate,
    encode_bit_flip, decode_bit_flip, correct_bit_flip,
    encode_phase_flip, decode_phase_flip, correct_phase_flip,
    encode_shor, decode_shor,
    inject_bit_flip, inject_phase_flip,
    allclose_up_to_global_phase,
)


LOGICAL_STATES = [
    (1, 0),
    (0, 1),
    (0.6, 0.8),
    (1, 1j),
    (0.28, -0.96),
]


class TestBitFlipCode:
    """Tests for the 3-qubit repetition code."""

    def test_encoding_repeats_basis_states(self):
        """α|0⟩ + β|1⟩ → α|000⟩ + β|111⟩."""
        reg = encode_bit_flip(Qubit(0.6, 0.8))
        sv = reg.get_state_vector()
        assert np.isclose(sv["|000⟩"], 0.6)
        assert np.isclose(sv["|111⟩"], 0.8)

    @pytest.mark.parametrize("bit", [0, 1])
    @pytest.mark.parametrize("flipped", [None, 0, 1, 2])
    def test_majority_vote_recovers_classical_bit(self, bit, flipped):
        """Decoding returns the encoded bit even with one flipped qubit."""
        reg = encode_bit_flip(Qubit(1 - bit, bit), rng=np.random.default_rng(0))
        if flipped is not None:
            inject_bit_flip(reg, flipped)
        decoded = decode_bit_flip(reg)
        assert np.allclose(decoded.amplitudes, [1 - bit, bit])

    def test_two_flips_defeat_the_code(self):
        """Two errors out-vote the data."""
        reg = encode_bit_flip(Qubit(1, 0), rng=np.random.default_rng(0))
        inject_bit_flip(reg, 0)
        inject_bit_flip(reg, 2)
        assert np.allclose(decode_bit_flip(reg).amplitudes, [0, 1])

    @pytest.mark.parametrize("alpha,beta", LOGICAL_STATES)
    @pytest.mark.parametrize("flipped", [None, 0, 1, 2])
    def test_correction_preserves_superposition(self, alpha, beta, flipped):
        """Unitary correction returns the logical qubit itself."""
        logical = Qubit(alpha, beta)
        reg = encode_bit_flip(logical)
        if flipped is not None:
            inject_bit_flip(reg, flipped)
        recovered = correct_bit_flip(reg)
        assert allclose_up_to_global_phase(recovered.amplitudes, logical.amplitudes)


class TestPhaseFlipCode:
    """Tests for the 3-qubit phase-flip code."""

    def test_encoding_uses_hadamard_basis(self):
        """|0⟩ → |+++⟩, a uniform superposition."""
        reg = encode_phase_flip(Qubit())
        assert np.allclose(reg.get_state(), np.ones(8) / np.sqrt(8))

    @pytest.mark.parametrize("bit", [0, 1])
    @pytest.mark.parametrize("flipped", [None, 0, 1, 2])
    def test_decode_with_phase_error(self, bit, flipped):
        """Majority decoding survives one phase flip."""
        reg = encode_phase_flip(Qubit(1 - bit, bit), rng=np.random.default_rng(3))
        if flipped is not None:
            inject_phase_flip(reg, flipped)
        assert np.allclose(decode_phase_flip(reg).amplitudes, [1 - bit, bit])

    @pytest.mark.parametrize("alpha,beta", LOGICAL_STATES)
    @pytest.mark.parametrize("flipped", [None, 0, 1, 2])
    def test_correction_preserves_superposition(self, alpha, beta, flipped):
        """A single Z error is undone without measurement."""
        logical = Qubit(alpha, beta)
        reg = encode_phase_flip(logical)
        if flipped is not None:
            inject_phase_flip(reg, flipped)
        recovered = correct_phase_flip(reg)
        assert allclose_up_to_global_phase(recovered.amplitudes, logical.amplitudes)


class TestShorCode:
    """Tests for the 9-qubit Shor code."""

    def test_encoded_register_size(self):
        """The Shor code uses nine physical qubits."""
        reg = encode_shor(Qubit(0.6, 0.8))
        assert reg.num_qubits == 9
        assert np.isclose(np.linalg.norm(reg.get_state()), 1)

    def test_logical_zero_amplitudes(self):
        """|0⟩_L = (|000⟩ + |111⟩)^⊗3 / 2√2."""
        sv = encode_shor(Qubit()).get_state_vector()
        amp = 1 / (2 * np.sqrt(2))
        assert np.isclose(sv["|000000000⟩"], amp)
        assert np.isclose(sv["|111111111⟩"], amp)
        assert np.isclose(sv["|111000111⟩"], amp)

    @pytest.mark.parametrize("alpha,beta", LOGICAL_STATES)
    def test_round_trip_without_error(self, alpha, beta):
        """decode_shor(encode_shor(q)) = q."""
        logical = Qubit(alpha, beta)
        recovered = decode_shor(encode_shor(logical))
        assert allclose_up_to_global_phase(recovered.amplitudes, logical.amplitudes)

    @pytest.mark.parametrize("index", range(9))
    @pytest.mark.parametrize("error", ["X", "Y", "Z"])
    def test_corrects_any_single_qubit_error(self, index, error):
        """One X, Y or Z error on any of the nine qubits is corrected."""
        logical = Qubit(0.6, 0.8j)
        reg = encode_shor(logical)
        if error == "X":
            inject_bit_flip(reg, index)
        elif error == "Z":
            inject_phase_flip(reg, index)
        else:
            reg.apply_gate(Y_gate, index)
        recovered = decode_shor(reg)
        assert allclose_up_to_global_phase(recovered.amplitudes, logical.amplitudes)
