"""Tests for request validation and tuning system dispatch."""

import pytest

from fret_placement import config
from fret_placement.just import Symmetry
from fret_placement.systems import (
    BachWellTemperament,
    EqualTemperament,
    FiveLimitFromPythagorean,
    FretboardRequestError,
    JustFromRatios,
    Meantone,
    PtolemyDiatonic,
    Pythagorean,
    Saz,
    build_fretboard,
    fretboard_for_request,
    parse_positive_int,
    parse_request,
)


class TestScaleLengthValidation:
    """Invalid scale lengths are rejected before any calculation."""

    @pytest.mark.parametrize("params", [
        {},
        {"scaleLength": ""},
        {"scaleLength": "0"},
        {"scaleLength": "-100"},
        {"scaleLength": "three"},
        {"scaleLength": "nan"},
        {"scaleLength": "inf"},
    ])
    def test_rejected(self, params):
        with pytest.raises(FretboardRequestError, match="scaleLength"):
            parse_request(params)

    def test_accepts_decimal(self):
        assert parse_request({"scaleLength": "647.7"}).scale_length == 647.7


class TestSystemSelection:
    """Tests for selecting and configuring a tuning system."""

    def test_unknown_system(self):
        with pytest.raises(FretboardRequestError, match="tuning system"):
            parse_request({"scaleLength": "540", "tuningSystem": "invalid"})

    def test_default_is_ptolemy_ionian(self):
        request = parse_request({"scaleLength": "540"})
        assert request.system == PtolemyDiatonic(mode="Ionian", octaves=1)

    @pytest.mark.parametrize("selector, expected", [
        ("equal", EqualTemperament(divisions=31, octaves=1)),
        ("saz", Saz()),
        ("pythagorean", Pythagorean()),
        ("meantone", Meantone(extended=False)),
        ("extendedMeantone", Meantone(extended=True)),
        ("diatonic", PtolemyDiatonic()),
        ("just5limitFromPythagorean", FiveLimitFromPythagorean()),
        ("just5limitFromRatios", JustFromRatios(limit=5, symmetry=Symmetry.ASYMMETRIC)),
        ("just7limitFromRatios", JustFromRatios(limit=7, symmetry=Symmetry.ASYMMETRIC)),
        ("just13limitFromRatios", JustFromRatios(limit=13, symmetry=Symmetry.ASYMMETRIC)),
        ("justFromRatios", JustFromRatios(limit=5, symmetry=Symmetry.ASYMMETRIC)),
        ("bachWellTemperament", BachWellTemperament()),
    ])
    def test_selectors(self, selector, expected):
        request = parse_request({"scaleLength": "540", "tuningSystem": selector})
        assert request.system == expected


class TestParameterFallbacks:
    """Invalid sub-parameters fall back to their defaults."""

    @pytest.mark.parametrize("value, expected", [
        ("3", 3),
        (None, 2),
        ("", 2),
        ("invalid", 2),
        ("0", 2),
        ("-4", 2),
    ])
    def test_positive_int(self, value, expected):
        params = {} if value is None else {"octaves": value}
        assert parse_positive_int(params, "octaves", 2) == expected

    @pytest.mark.parametrize("value, expected", [
        ("8", 8),
        ("9", 2),
        ("1000000000", 2),
    ])
    def test_positive_int_maximum(self, value, expected):
        assert parse_positive_int({"octaves": value}, "octaves", 2, maximum=8) == expected

    def test_divisions_above_maximum(self):
        request = parse_request({"scaleLength": "540", "tuningSystem": "equal", "divisions": "1000000000"})
        assert request.system == EqualTemperament(divisions=config.DEFAULT_EQUAL_DIVISIONS)

    def test_divisions_at_maximum(self):
        divisions = str(config.MAX_EQUAL_DIVISIONS)
        request = parse_request({"scaleLength": "540", "tuningSystem": "equal", "divisions": divisions})
        assert request.system.divisions == config.MAX_EQUAL_DIVISIONS

    @pytest.mark.parametrize("selector", ["equal", "ptolemy"])
    def test_octaves_above_maximum(self, selector):
        octaves = str(config.MAX_OCTAVES + 1)
        request = parse_request({"scaleLength": "540", "tuningSystem": selector, "octaves": octaves})
        assert request.system.octaves == config.DEFAULT_OCTAVES

    def test_custom_divisions(self):
        request = parse_request({"scaleLength": "540", "tuningSystem": "equal", "divisions": "19"})
        assert request.system == EqualTemperament(divisions=19)

    def test_invalid_mode(self):
        request = parse_request({"scaleLength": "540", "tuningSystem": "ptolemy", "diatonicMode": "Hypodorian"})
        assert request.system.mode == config.DEFAULT_DIATONIC_MODE

    def test_mode_alias(self):
        request = parse_request({"scaleLength": "540", "mode": "Dorian"})
        assert request.system.mode == "Dorian"

    def test_invalid_symmetry(self):
        request = parse_request({"scaleLength": "540", "tuningSystem": "just5limitFromRatios", "justSymmetry": "lopsided"})
        assert request.system.symmetry == Symmetry.ASYMMETRIC

    def test_limit(self):
        request = parse_request({"scaleLength": "540", "tuningSystem": "justFromRatios", "limit": "7"})
        assert request.system.limit == 7

    def test_unsupported_limit(self):
        request = parse_request({"scaleLength": "540", "tuningSystem": "justFromRatios", "limit": "11"})
        assert request.system.limit == 5


class TestFretboards:
    """End-to-end fretboards for each tuning system."""

    def test_pythagorean(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "pythagorean"})
        assert fretboard.system == "Pythagorean"
        assert fretboard.description == "Fret positions based on 3-limit Pythagorean ratios."
        assert fretboard.scale_length == 540.0
        assert len(fretboard.frets) == 13
        assert fretboard.frets[0].label == "256:243"
        assert fretboard.frets[0].position == 27.42

    def test_five_limit_from_pythagorean(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "just5limitFromPythagorean"})
        assert fretboard.system == "5-limit Just Intonation"
        assert len(fretboard.frets) == 13
        assert fretboard.frets[0].label == "16:15"
        assert fretboard.frets[0].position == 33.75
        assert fretboard.frets[0].comment == "Minor Second"
        assert fretboard.frets[1].label == "10:9"
        assert fretboard.frets[1].position == 54.0
        assert fretboard.frets[12].label == "2:1"
        assert fretboard.frets[12].position == 270.0

    @pytest.mark.parametrize("symmetry, second", [
        ("asymmetric", "10:9"),
        ("symmetric1", "10:9"),
        ("symmetric2", "9:8"),
    ])
    def test_symmetry_selects_major_second(self, symmetry, second):
        fretboard = fretboard_for_request({
            "scaleLength": "540",
            "tuningSystem": "just5limitFromRatios",
            "justSymmetry": symmetry,
        })
        assert fretboard.frets[1].label == second

    def test_seven_limit(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "just7limitFromRatios"})
        assert fretboard.system == "7-limit Just Intonation"
        assert [f.label for f in fretboard.frets] == [
            "15:14", "8:7", "6:5", "5:4", "4:3", "7:5", "3:2", "8:5", "5:3", "7:4", "15:8", "2:1",
        ]

    def test_equal_temperament(self):
        fretboard = build_fretboard(600.0, EqualTemperament(divisions=12))
        assert fretboard.system == "12-TET"
        assert fretboard.description == "Fret positions for 12-tone equal temperament."
        assert len(fretboard.frets) == 13
        assert fretboard.frets[0].label == "0.00 cents"
        assert fretboard.frets[0].position == 0.0
        assert fretboard.frets[1].position == 33.68
        assert fretboard.frets[-1].label == "1200.00 cents"
        assert fretboard.frets[-1].position == 300.0

    def test_default_equal_is_31_tet(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "equal"})
        assert fretboard.system == "31-TET"
        assert len(fretboard.frets) == 32

    def test_meantone(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "meantone"})
        assert fretboard.system == "meantone"
        assert fretboard.description == (
            "Fret positions for meantone computed by narrowing of fifths by 0.25 of a "
            "syntonic comma (81/80).  Nominal note names used given a tonic of D."
        )
        assert len(fretboard.frets) == 13
        assert fretboard.frets[0].label == "1 (Eb)"
        assert fretboard.frets[0].position == 35.3
        assert fretboard.frets[12].label == "13 (Octave)"
        assert fretboard.frets[12].position == 270.0

    def test_extended_meantone(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "extendedMeantone"})
        assert fretboard.description.startswith("Fret positions for extended meantone")
        assert len(fretboard.frets) == 19
        assert fretboard.frets[0].label == "1 (D#)"
        assert fretboard.frets[0].position == 23.2
        assert fretboard.frets[1].label == "2 (Eb)"
        assert fretboard.frets[1].position == 35.3
        assert fretboard.frets[9].label == "10 (Ab)"
        assert fretboard.frets[9].position == 162.7
        assert fretboard.frets[18].label == "19 (Octave)"
        assert fretboard.frets[18].position == 270.0

    def test_ptolemy_default(self):
        fretboard = fretboard_for_request({"scaleLength": "540"})
        assert fretboard.system == "Ptolemy"
        assert fretboard.description == "Fret positions for Ptolemy's 5-limit intense diatonic scale in Ionian mode."
        assert [(f.label, f.position) for f in fretboard.frets] == [
            ("9:8", 60.0), ("5:4", 108.0), ("4:3", 135.0), ("3:2", 180.0),
            ("5:3", 216.0), ("15:8", 252.0), ("2:1", 270.0),
        ]

    def test_ptolemy_two_octaves(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "octaves": "2"})
        assert len(fretboard.frets) == 14
        assert fretboard.frets[7].label == "9:4"
        assert fretboard.frets[7].position == 300.0

    def test_phrygian(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "diatonicMode": "Phrygian"})
        assert [f.label for f in fretboard.frets] == ["16:15", "6:5", "4:3", "3:2", "8:5", "16:9", "2:1"]

    def test_saz(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "saz"})
        assert fretboard.system == "saz"
        assert len(fretboard.frets) == 17
        assert fretboard.frets[0].label == "18:17"

    def test_bach(self):
        fretboard = fretboard_for_request({"scaleLength": "540", "tuningSystem": "bachWellTemperament"})
        assert fretboard.system == "Bach's Well-Tempered Tuning"
        assert len(fretboard.frets) == 12
        assert fretboard.frets[-1].label == "12 (Octave)"
        assert fretboard.frets[-1].position == 270.0

    def test_unknown_variant(self):
        with pytest.raises(TypeError):
            build_fretboard(540.0, object())
