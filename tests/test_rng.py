"""Unit tests for the seeded random number generator."""

import string

import pytest

from spine_dungeon.rng import SeededRandom, fold_seed, generate_random_seed, seed_rng


class TestFoldSeed:
    """String seeds fold to a 32-bit integer with a rolling hash."""

    def test_empty_seed_folds_to_zero(self):
        assert fold_seed("") == 0

    def test_single_character(self):
        assert fold_seed("a") == 97

    def test_two_characters(self):
        # 97 * 31 + 98
        assert fold_seed("ab") == 3105

    def test_integer_seed_matches_its_string(self):
        assert fold_seed(42) == fold_seed("42")

    def test_long_seed_stays_in_int32_range(self):
        folded = fold_seed("the quick brown fox jumps over the lazy dog" * 10)
        assert -(2**31) <= folded < 2**31


class TestSeededRandom:
    """Tests for determinism and range of SeededRandom."""

    def test_first_value_for_empty_seed(self):
        """Pins the generator so accidental algorithm changes are caught."""
        rng = SeededRandom("")
        assert rng() == 3145194475 / 4294967296

    def test_same_seed_same_sequence(self):
        a = seed_rng("abc123")
        b = seed_rng("abc123")
        assert [a() for _ in range(100)] == [b() for _ in range(100)]

    def test_different_seeds_differ(self):
        a = seed_rng("abc")
        b = seed_rng("abd")
        assert [a() for _ in range(5)] != [b() for _ in range(5)]

    def test_values_in_unit_interval(self):
        rng = seed_rng("range-check")
        for _ in range(5000):
            value = rng()
            assert 0.0 <= value < 1.0

    def test_values_are_reasonably_spread(self):
        rng = seed_rng("spread")
        buckets = [0] * 10
        for _ in range(10000):
            buckets[int(rng() * 10)] += 1
        for count in buckets:
            assert 700 < count < 1300

    def test_instances_do_not_share_state(self):
        """Interleaving two generators gives the same streams as running them apart."""
        solo_a = seed_rng("left")
        solo_b = seed_rng("right")
        expected_a = [solo_a() for _ in range(20)]
        expected_b = [solo_b() for _ in range(20)]

        a = seed_rng("left")
        b = seed_rng("right")
        got_a, got_b = [], []
        for _ in range(20):
            got_a.append(a())
            got_b.append(b())

        assert got_a == expected_a
        assert got_b == expected_b

    def test_call_and_random_are_the_same_stream(self):
        a = seed_rng("x")
        b = seed_rng("x")
        assert [a() for _ in range(10)] == [b.random() for _ in range(10)]


class TestHelpers:
    def test_randint_below_range(self):
        rng = seed_rng("ints")
        values = {rng.randint_below(4) for _ in range(500)}
        assert values == {0, 1, 2, 3}

    def test_randint_below_rejects_non_positive(self):
        with pytest.raises(ValueError):
            seed_rng("x").randint_below(0)

    def test_shuffle_is_a_permutation(self):
        rng = seed_rng("shuffle")
        items = list(range(20))
        rng.shuffle(items)
        assert sorted(items) == list(range(20))

    def test_shuffle_is_deterministic(self):
        a, b = list(range(20)), list(range(20))
        seed_rng("s").shuffle(a)
        seed_rng("s").shuffle(b)
        assert a == b


class TestGenerateRandomSeed:
    def test_default_length_and_alphabet(self):
        seed = generate_random_seed()
        assert len(seed) == 6
        allowed = set(string.ascii_letters + string.digits)
        assert set(seed) <= allowed

    def test_custom_length(self):
        assert len(generate_random_seed(12)) == 12
