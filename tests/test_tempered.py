"""Unit tests for meantone and well temperament."""

import math

import pytest

from fret_placement.tempered import (
    EXTENDED_MEANTONE_NOTE_NAMES,
    MEANTONE_NOTE_NAMES,
    WELL_TEMPERED_FIFTHS,
    TemperedScale,
    meantone_scale,
    octave_reduce_float,
    tempered_fifth,
    well_tempered_scale,
)


class TestOctaveReduceFloat:
    """Tests for floating octave reduction."""

    def test_above_octave(self):
        assert octave_reduce_float(3.0) == 1.5

    def test_below_unison(self):
        assert octave_reduce_float(0.75) == 1.5

    def test_unison_stays(self):
        assert octave_reduce_float(1.0) == 1.0

    def test_octave_wraps(self):
        assert octave_reduce_float(2.0) == 1.0

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            octave_reduce_float(0.0)
        with pytest.raises(ValueError):
            octave_reduce_float(-1.5)


class TestTemperedFifth:
    """Tests for comma-narrowed fifths."""

    def test_pure_fifth(self):
        assert tempered_fifth(0.0) == 1.5

    def test_quarter_comma_fifth_is_fourth_root_of_five(self):
        """Four quarter-comma fifths make a pure 5:4 two octaves up."""
        assert tempered_fifth(0.25) == pytest.approx(5 ** 0.25)


class TestMeantone:
    """Tests for quarter-comma meantone."""

    def test_thirteen_notes(self):
        scale = meantone_scale()
        assert len(scale.ratios) == 13
        assert scale.names == MEANTONE_NOTE_NAMES

    def test_tonic_first(self):
        assert meantone_scale().ratios[0] == 1.0

    def test_ascending_within_octave(self):
        ratios = meantone_scale().ratios
        assert list(ratios) == sorted(ratios)
        assert all(1.0 <= r < 2.0 for r in ratios)

    def test_pure_major_third(self):
        """F# above D is a pure 5:4."""
        scale = meantone_scale()
        assert scale.name_of(4) == "F#"
        assert scale.ratios[4] == pytest.approx(1.25)

    def test_extended(self):
        scale = meantone_scale(extended=True)
        assert len(scale.ratios) == 19
        assert scale.names == EXTENDED_MEANTONE_NOTE_NAMES
        assert scale.ratios[1] == pytest.approx(1.044907, abs=1e-6)

    def test_extended_sharps_above_flats(self):
        scale = meantone_scale(extended=True)
        # Nine fifths up from D lands below F
        assert scale.name_of(4) == "E#"
        assert 1200 * math.log2(scale.ratios[4]) == pytest.approx(269.2, abs=0.1)
        assert scale.name_of(5) == "F"
        assert 1200 * math.log2(scale.ratios[5]) == pytest.approx(310.3, abs=0.1)


class TestWellTemperament:
    """Tests for Lehman's Bach temperament."""

    def test_twelve_fifths(self):
        assert len(WELL_TEMPERED_FIFTHS) == 12

    def test_twelve_notes(self):
        scale = well_tempered_scale()
        assert len(scale.ratios) == 12
        assert scale.ratios[0] == 1.0

    def test_ascending_within_octave(self):
        ratios = well_tempered_scale().ratios
        assert list(ratios) == sorted(ratios)
        assert all(1.0 <= r < 2.0 for r in ratios)

    def test_first_fifth_is_pure(self):
        assert 1.5 in well_tempered_scale().ratios

    def test_circle_is_closed_within_a_comma(self):
        """The twelve tempered fifths sum to roughly seven octaves."""
        total = sum(1200.0 * math.log2(1.5 * (81 / 80) ** f) for f in WELL_TEMPERED_FIFTHS)
        assert abs(total - 8400.0) < 25.0


class TestTemperedScale:
    """Tests for positional naming."""

    def test_names_cycle(self):
        scale = TemperedScale(ratios=(1.0, 1.1, 1.2), names=("a", "b"))
        assert scale.name_of(0) == "a"
        assert scale.name_of(1) == "b"
        assert scale.name_of(2) == "a"
