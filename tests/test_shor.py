"""Tests for Shor's algorithm components."""

import numpy as np
import pytest

from qucore import (
    Qubit, QuantumRegister, H_gate,
    gcd, is_coprime, int_to_bits, bits_to_int, is_unitary,
    estimate_period, refine_period, find_factors, register_sizes,
    modular_multiplication_matrix, controlled_modular_multiplication,
    shor_factor, shor_factor_multiple_runs,
)


def _load(value: int, bits: int):
    return [Qubit(1 - b, b) for b in int_to_bits(value, bits)]


class TestNumberTheory:
    """Tests for classical number theory utilities."""

    def test_gcd_basic(self):
        """GCD should return greatest common divisor."""
        assert gcd(48, 18) == 6
        assert gcd(17, 5) == 1
        assert gcd(15, 5) == 5
        assert gcd(0, 7) == 7
        assert gcd(-4, 6) == 2

    def test_is_coprime(self):
        """is_coprime should correctly identify coprime pairs."""
        assert is_coprime(7, 15)
        assert not is_coprime(5, 15)
        assert is_coprime(11, 15)

    def test_bits_round_trip_msb_first(self):
        """Bit lists are most significant bit first."""
        assert int_to_bits(6, 4) == [0, 1, 1, 0]
        assert bits_to_int([1, 0, 1]) == 5


class TestPeriodEstimation:
    """Tests for the exhaustive period estimator."""

    @pytest.mark.parametrize(
        "r,k,num_bits",
        [(2, 1, 8), (4, 1, 8), (4, 3, 8), (8, 5, 8), (16, 7, 10), (64, 1, 8)],
    )
    def test_exact_fraction_recovers_period(self, r, k, num_bits):
        """m = k·2^t/r with gcd(k, r) = 1 gives r exactly."""
        measured = k * 2 ** num_bits // r
        assert estimate_period(measured, num_bits) == r

    def test_reduced_fraction_gives_divisor(self):
        """m = 2·2^t/4 reduces to 1/2."""
        assert estimate_period(128, 8) == 2

    def test_zero_measurement(self):
        """m = 0 carries no information and gives 1."""
        assert estimate_period(0, 8) == 1

    def test_approximate_fraction(self):
        """Non-dyadic periods are found from the nearest measurement."""
        # 2^9 / 6 ≈ 85.33, nearest measurement 85
        assert estimate_period(85, 9) == 6

    def test_max_period_bound(self):
        """Denominators above max_period are not considered."""
        assert estimate_period(1, 8, max_period=100) <= 100
        assert estimate_period(64, 8, max_period=3) in (1, 2, 3)

    def test_refine_lifts_divisor(self):
        """A divisor of the true period is lifted to the period."""
        assert refine_period(2, 7, 15) == 4
        assert refine_period(4, 7, 15) == 4
        assert refine_period(3, 2, 21) == 6

    def test_refine_keeps_unrelated_candidate(self):
        """If no multiple works, the candidate is returned unchanged."""
        assert refine_period(7, 7, 15) == 7


class TestFactorRecovery:
    """Tests for the classical post-processing step."""

    def test_factors_of_15(self):
        """Period 4 of 7^x mod 15 gives 3 × 5."""
        factors, error = find_factors(15, 7, 4)
        assert error is None
        assert factors == (3, 5)

    def test_odd_period(self):
        """Odd periods are a soft failure."""
        factors, error = find_factors(15, 7, 3)
        assert factors is None
        assert "odd" in error

    def test_trivial_factors(self):
        """a^(r/2) ≡ -1 mod N gives only trivial factors."""
        # 14 ≡ -1 mod 15 has period 2 and 14^1 + 1 ≡ 0
        factors, error = find_factors(15, 14, 2)
        assert factors is None
        assert "trivial" in error


class TestModularMultiplication:
    """Tests for controlled modular multiplication circuits."""

    def test_register_sizes(self):
        """Control = ⌈log2 N²⌉, work = ⌈log2 N⌉."""
        assert register_sizes(15) == (8, 4)
        assert register_sizes(21) == (9, 5)

    def test_multiplication_matrix_is_permutation(self):
        """x → a·x mod N is unitary on the full work space."""
        U = modular_multiplication_matrix(7, 15, 4)
        assert is_unitary(U)
        assert np.allclose(U.sum(axis=0), 1)

    @pytest.mark.parametrize("x", [1, 2, 4, 7, 8, 11, 13, 14])
    def test_multiply_7_mod15(self, x):
        """Controlled ×7 mod 15 should match classical computation."""
        reg = QuantumRegister.from_qubits([Qubit(0, 1)] + _load(x, 4))
        controlled_modular_multiplication(reg, 0, [1, 2, 3, 4], 7, 15)
        bits = reg.measure()
        assert bits[0] == 1
        assert bits_to_int(bits[1:]) == (7 * x) % 15

    @pytest.mark.parametrize("x", [1, 2, 4, 7])
    def test_multiply_no_op_when_control_zero(self, x):
        """Controlled multiplication should be identity when control=|0⟩."""
        reg = QuantumRegister.from_qubits([Qubit(1, 0)] + _load(x, 4))
        controlled_modular_multiplication(reg, 0, [1, 2, 3, 4], 7, 15)
        assert bits_to_int(reg.measure()[1:]) == x

    def test_controlled_in_superposition(self):
        """A control in superposition entangles control and work registers."""
        reg = QuantumRegister.from_qubits([Qubit(1, 1)] + _load(1, 4))
        controlled_modular_multiplication(reg, 0, [1, 2, 3, 4], 7, 15)
        probs = reg.get_probabilities()
        assert np.isclose(probs["|00001⟩"], 0.5)
        assert np.isclose(probs["|10111⟩"], 0.5)


class TestShorAlgorithm:
    """Tests for the complete Shor's algorithm."""

    def test_shor_returns_valid_factors_or_error(self):
        """Each run returns valid factors of 15 or a soft failure."""
        rng = np.random.default_rng(0)
        for _ in range(5):
            result = shor_factor(15, 7, rng=rng)
            assert result.N == 15 and result.a == 7
            assert 0 <= result.measured_value < 2 ** 8
            if result.factors is not None:
                assert result.factors == (3, 5)
                assert result.error is None
            else:
                assert result.error

    def test_measurements_are_multiples_of_q_over_r(self):
        """For N=15, a=7 (r=4) only m ∈ {0, 64, 128, 192} can be measured."""
        rng = np.random.default_rng(1)
        for _ in range(10):
            assert shor_factor(15, 7, rng=rng).measured_value in (0, 64, 128, 192)

    def test_shor_succeeds_most_of_the_time(self):
        """Only m = 0 fails for N=15, a=7, so ~75% of runs succeed."""
        rng = np.random.default_rng(2)
        n_trials = 20
        successes = sum(shor_factor(15, 7, rng=rng).factors is not None
                        for _ in range(n_trials))
        assert successes >= n_trials * 0.5

    def test_shor_factors_21(self):
        """N=21 with a=2 (period 6) is factored within a few runs."""
        result = shor_factor_multiple_runs(21, a=2, num_runs=10,
                                           rng=np.random.default_rng(4))
        assert result.factors == (3, 7)

    def test_multiple_runs_random_base(self):
        """With no base given, random coprime bases are tried."""
        result = shor_factor_multiple_runs(15, num_runs=10, rng=np.random.default_rng(3))
        assert result.factors == (3, 5)
        assert is_coprime(result.a, 15)

    @pytest.mark.parametrize("seed", range(5))
    def test_random_base_never_shares_factor(self, seed):
        """Drawn bases are coprime to N, so no run stops on a shared factor."""
        result = shor_factor_multiple_runs(9, num_runs=1, rng=np.random.default_rng(seed))
        assert is_coprime(result.a, 9)
        assert result.error is None or "not coprime" not in result.error

    @pytest.mark.parametrize(
        "N,a,fragment",
        [(2, 1, "N must be"), (15, 1, "a must be"), (15, 15, "a must be"),
         (15, 6, "not coprime")],
    )
    def test_invalid_input_is_soft_failure(self, N, a, fragment):
        """Bad inputs return an error result without simulating."""
        result = shor_factor(N, a)
        assert result.factors is None
        assert result.measured_value is None
        assert fragment in result.error

    def test_too_many_qubits(self):
        """N beyond the simulator's qubit budget raises."""
        with pytest.raises(ValueError):
            shor_factor(1001, 2)

    def test_result_is_plain_data(self):
        """Results convert to a plain dict."""
        d = shor_factor(15, 7, rng=np.random.default_rng(0))._asdict()
        assert set(d) == {"N", "a", "measured_value", "estimated_period", "factors", "error"}


class TestModularExponentiationPeriod:
    """Tests verifying the period of 7^x mod 15."""

    def test_power_cycle(self):
        """7^x mod 15 cycles with period 4."""
        expected = [1, 7, 4, 13, 1, 7, 4, 13]
        actual = [pow(7, x, 15) for x in range(8)]
        assert actual == expected
