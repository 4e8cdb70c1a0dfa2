"""Unit tests for the equal division of the octave."""

import pytest

from fret_placement.edo import Division, division, division_in_cents, equal_divisions


class TestDivision:
    """Tests for single divisions."""

    def test_twelfth_of_twelve_is_octave(self):
        """The last step of 12-EDO is 2:1 at 1200 cents."""
        assert division(12, 12) == Division(ratio=2.0, cents=1200.0)

    def test_semitone(self):
        step = division(1, 12)
        assert step.ratio == pytest.approx(1.0594630943592953)
        assert step.cents == 100.0

    def test_cents_of_octave(self):
        assert division_in_cents(2.0) == 1200.0

    def test_cents_are_whole(self):
        """31-EDO steps are rounded to whole cents."""
        assert division(1, 31).cents == 39.0

    def test_invalid_ratio(self):
        with pytest.raises(ValueError):
            division_in_cents(0.0)


class TestEqualDivisions:
    """Tests for a full octave of divisions."""

    def test_twelve_edo(self):
        steps = equal_divisions(12)
        assert [s.cents for s in steps] == [100.0 * i for i in range(1, 13)]
        assert [s.ratio for s in steps] == pytest.approx([
            1.0594630943592953, 1.122462048309373, 1.189207115002721,
            1.2599210498948732, 1.3348398541700344, 1.414213562373095,
            1.4983070768766815, 1.5874010519681994, 1.6817928305074292,
            1.7817974362806788, 1.887748625363387, 2.0,
        ])

    def test_count_matches_divisions(self):
        for n in (1, 5, 19, 31, 53):
            assert len(equal_divisions(n)) == n

    def test_ascending(self):
        steps = equal_divisions(19)
        ratios = [s.ratio for s in steps]
        assert ratios == sorted(ratios)
        assert ratios[-1] == 2.0

    def test_zero_divisions_rejected(self):
        with pytest.raises(ValueError):
            equal_divisions(0)
