"""Tempered scale generators: quarter-comma meantone and well temperament.

Tempered fifths are irrational, so these work in floating point and
reduce into the octave by repeated halving/doubling.
"""

from dataclasses import dataclass

from . import config

SYNTONIC_COMMA = 81.0 / 80.0
PURE_FIFTH = 3.0 / 2.0

# Nominal note names for a tonic of D, in ascending pitch order
MEANTONE_NOTE_NAMES: tuple[str, ...] = (
    "D", "Eb", "E", "F", "F#", "G", "G#", "Ab", "A", "Bb", "B", "C", "C#",
)
EXTENDED_MEANTONE_NOTE_NAMES: tuple[str, ...] = (
    "D", "D#", "Eb", "E", "E#", "F", "F#", "Gb", "G", "G#", "Ab", "A", "A#",
    "Bb", "B", "Cb", "C", "C#", "Db",
)

# Lehman's reading of the Wohltemperirte Clavier title-page loops:
# fraction of a syntonic comma each fifth round the circle is altered by
WELL_TEMPERED_FIFTHS: tuple[float, ...] = (
    0.0, -1.0 / 12.0, -1.0 / 6.0,
    0.0, -1.0 / 6.0, -1.0 / 12.0,
    0.0, -1.0 / 6.0, -1.0 / 12.0,
    0.0, -1.0 / 6.0, -1.0 / 12.0,
)

WELL_TEMPERED_INTERVAL_NAMES: tuple[str, ...] = (
    "Unison", "Minor Second", "Major Second", "Minor Third", "Major Third",
    "Fourth", "Augmented Fourth", "Fifth", "Augmented Fifth", "Major Sixth",
    "Minor Seventh", "Major Seventh",
)


@dataclass(frozen=True)
class TemperedScale:
    """Ascending ratios from the tonic (index 0 is the tonic itself).

    Names are matched to ratios by position, cycling if there are more
    ratios than names.
    """
    ratios: tuple[float, ...]
    names: tuple[str, ...]

    def name_of(self, degree: int) -> str:
        return self.names[degree % len(self.names)]


def octave_reduce_float(ratio: float) -> float:
    """Halve or double a ratio until it lies in [1, 2)."""
    if ratio <= 0:
        raise ValueError(f"Ratio must be positive, got {ratio}")
    while ratio >= 2.0:
        ratio /= 2.0
    while ratio < 1.0:
        ratio *= 2.0
    return ratio


def tempered_fifth(comma_fraction: float) -> float:
    """A 3:2 fifth narrowed by `comma_fraction` of a syntonic comma."""
    return PURE_FIFTH * SYNTONIC_COMMA ** -comma_fraction


def meantone_scale(
    extended: bool = False,
    comma_fraction: float = config.MEANTONE_COMMA_FRACTION,
) -> TemperedScale:
    """Meantone scale from a chain of tempered fifths around the tonic.

    Args:
        extended: Use nine fifths either side (19 notes) instead of six (13)
        comma_fraction: Fraction of the syntonic comma each fifth is narrowed by

    Returns:
        TemperedScale whose first ratio is the tonic (1.0)
    """
    if extended:
        fifths = config.EXTENDED_MEANTONE_FIFTHS
        names = EXTENDED_MEANTONE_NOTE_NAMES
    else:
        fifths = config.MEANTONE_FIFTHS
        names = MEANTONE_NOTE_NAMES

    fifth = tempered_fifth(comma_fraction)
    ratios = sorted(
        octave_reduce_float(fifth ** i) for i in range(-fifths, fifths + 1)
    )
    return TemperedScale(ratios=tuple(ratios), names=names)


def well_tempered_scale() -> TemperedScale:
    """Bach's well temperament as decoded by Bradley Lehman (2005).

    Walks the circle of fifths from the tonic, applying each fifth's
    tempering in turn, then octave-reduces and sorts the twelve pitches.
    """
    ratios = [1.0]
    for fraction in WELL_TEMPERED_FIFTHS[:-1]:
        ratios.append(ratios[-1] * PURE_FIFTH * SYNTONIC_COMMA ** fraction)

    reduced = sorted(octave_reduce_float(r) for r in ratios)
    return TemperedScale(ratios=tuple(reduced), names=WELL_TEMPERED_INTERVAL_NAMES)
