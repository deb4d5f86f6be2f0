"""Tests for the seeded random source."""

import pytest

from platform_course.rng import RandomSource, LCG_MODULUS


class TestRandomSource:
    def test_reference_vector(self):
        # (12345 * 9301 + 49297) % 233280
        rng = RandomSource(12345)
        value = rng.next()
        assert rng.seed == 96382
        assert value == pytest.approx(96382 / 233280)

    def test_next_in_unit_interval(self):
        rng = RandomSource(7)
        for _ in range(1000):
            value = rng.next()
            assert 0.0 <= value < 1.0

    def test_same_seed_same_stream(self):
        a = RandomSource(42)
        b = RandomSource(42)
        assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]

    def test_different_seeds_differ(self):
        a = RandomSource(1)
        b = RandomSource(2)
        assert [a.next() for _ in range(10)] != [b.next() for _ in range(10)]

    def test_seed_stays_below_modulus(self):
        rng = RandomSource(10 ** 9)
        rng.next()
        assert 0 <= rng.seed < LCG_MODULUS

    def test_between_respects_bounds(self):
        rng = RandomSource(3)
        for _ in range(500):
            assert 180.0 <= rng.between(180.0, 200.0) < 200.0

    def test_between_matches_formula(self):
        rng = RandomSource(12345)
        assert rng.between(10.0, 20.0) == pytest.approx(10.0 + 96382 / 233280 * 10.0)

    def test_pick_returns_member(self):
        rng = RandomSource(5)
        widths = [100, 120, 140]
        for _ in range(100):
            assert rng.pick(widths) in widths

    def test_pick_uses_one_draw(self):
        rng = RandomSource(12345)
        # 0.413 * 7 -> index 2
        assert rng.pick([100, 120, 140, 150, 160, 180, 200]) == 140
        assert rng.seed == 96382

    def test_randint_inclusive(self):
        rng = RandomSource(11)
        seen = {rng.randint(1, 3) for _ in range(300)}
        assert seen == {1, 2, 3}

    def test_chance_zero_never_fires(self):
        rng = RandomSource(9)
        assert not any(rng.chance(0.0) for _ in range(200))

    def test_chance_consumes_one_draw(self):
        rng = RandomSource(12345)
        rng.chance(0.5)
        assert rng.seed == 96382
