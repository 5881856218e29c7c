"""
Unit tests for the Distractor Selector and the random source behind it.
"""

import pytest

from wordgym.core.randomness import RandomSource
from wordgym.study.distractors import compose_options, pick_distractors


class TestPickDistractors:
    def test_excludes_correct_and_duplicates(self):
        pool = ["cat", "dog", "dog", "apple", "cat", "Dog"]
        picked = pick_distractors(pool, "cat", 10, RandomSource(0))

        assert "cat" not in picked
        assert len(picked) == len(set(picked))
        assert sorted(picked) == ["Dog", "apple", "dog"]

    def test_takes_requested_count(self):
        pool = [f"w{i}" for i in range(20)]
        picked = pick_distractors(pool, "w0", 3, RandomSource(0))

        assert len(picked) == 3
        assert "w0" not in picked

    def test_returns_fewer_when_pool_is_small(self):
        picked = pick_distractors(["a", "b"], "a", 3, RandomSource(0))
        assert picked == ["b"]

    def test_empty_pool(self):
        assert pick_distractors([], "a", 3, RandomSource(0)) == []

    def test_zero_count(self):
        assert pick_distractors(["a", "b"], "c", 0, RandomSource(0)) == []

    def test_seeded_is_reproducible(self):
        pool = [f"w{i}" for i in range(20)]
        first = pick_distractors(pool, "x", 5, RandomSource(7))
        second = pick_distractors(pool, "x", 5, RandomSource(7))
        assert first == second

    @pytest.mark.parametrize("seed", range(20))
    def test_uniqueness_property(self, seed):
        rng = RandomSource(seed)
        pool = [rng.shuffled(["a", "b", "c", "d", "a", "b"])[0] for _ in range(8)]
        picked = pick_distractors(pool, "a", seed % 5, rng)

        assert "a" not in picked
        assert len(picked) == len(set(picked))


class TestComposeOptions:
    @pytest.mark.parametrize("seed", range(20))
    def test_correct_appears_exactly_once(self, seed):
        rng = RandomSource(seed)
        options = compose_options("cat", ["dog", "apple", "water"], rng)

        assert options.count("cat") == 1
        assert sorted(options) == ["apple", "cat", "dog", "water"]

    def test_ignores_correct_among_distractors(self):
        options = compose_options("cat", ["cat", "dog"], RandomSource(0))
        assert sorted(options) == ["cat", "dog"]

    def test_correct_position_varies(self):
        positions = {
            compose_options("cat", ["dog", "apple", "water"], RandomSource(seed)).index("cat")
            for seed in range(50)
        }
        assert positions == {0, 1, 2, 3}


class TestRandomSource:
    def test_shuffled_is_a_permutation(self):
        items = list(range(10))
        result = RandomSource(1).shuffled(items)

        assert sorted(result) == items
        assert items == list(range(10))

    def test_sample_caps_at_length(self):
        assert len(RandomSource(1).sample([1, 2], 5)) == 2

    def test_chance_extremes(self):
        rng = RandomSource(1)
        assert not any(rng.chance(0.0) for _ in range(100))
        assert all(rng.chance(1.0) for _ in range(100))
