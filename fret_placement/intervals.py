"""Exact rational intervals and the catalogue of named ratios.

An interval is the frequency ratio of a pitch to the tonic, kept as a
reduced fraction of two positive integers. All just and Pythagorean scale
construction happens in this exact arithmetic; floating point is only
used for tempered systems whose fifths have no rational form.
"""

import math
from dataclasses import dataclass
from functools import total_ordering
from types import MappingProxyType
from typing import Optional


@total_ordering
@dataclass(frozen=True)
class Interval:
    """A frequency ratio numerator:denominator, always in lowest terms.

    Equality compares the reduced terms. Ordering compares the numeric
    value by cross-multiplication so that sorting never goes through a
    float.
    """
    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        assert self.denominator > 0, f"Interval denominator must be positive, got {self.denominator}"
        assert self.numerator > 0, f"Interval numerator must be positive, got {self.numerator}"
        divisor = math.gcd(self.numerator, self.denominator)
        object.__setattr__(self, "numerator", self.numerator // divisor)
        object.__setattr__(self, "denominator", self.denominator // divisor)

    def __lt__(self, other: "Interval") -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.numerator * other.denominator < other.numerator * self.denominator

    def __mul__(self, other: "Interval") -> "Interval":
        if not isinstance(other, Interval):
            return NotImplemented
        return self.compose(other)

    def __str__(self) -> str:
        return f"{self.numerator}:{self.denominator}"

    def compose(self, other: "Interval") -> "Interval":
        """Stack two intervals (multiply the ratios)."""
        return Interval(
            self.numerator * other.numerator,
            self.denominator * other.denominator,
        )

    def difference(self, other: "Interval") -> "Interval":
        """The interval between two pitches, larger divided by smaller.

        Args:
            other: Interval to measure against

        Returns:
            A ratio >= 1:1 (unison when both are equal)
        """
        if self < other:
            return Interval(other.numerator * self.denominator, other.denominator * self.numerator)
        return Interval(self.numerator * other.denominator, self.denominator * other.numerator)

    def reciprocal(self) -> "Interval":
        """The inverse ratio, e.g. 3:2 -> 2:3."""
        return Interval(self.denominator, self.numerator)

    def power(self, exponent: int) -> "Interval":
        """Stack this interval on itself `exponent` times.

        Negative exponents stack the reciprocal; zero gives the unison.
        Used for walking the circle of fifths.
        """
        if exponent < 0:
            return self.reciprocal().power(-exponent)
        return Interval(self.numerator ** exponent, self.denominator ** exponent)

    def octave_reduce(self) -> "Interval":
        """Move the interval into the octave [1:1, 2:1) by powers of two."""
        numerator, denominator = self.numerator, self.denominator
        while numerator < denominator:
            numerator *= 2
        while numerator >= 2 * denominator:
            denominator *= 2
        return Interval(numerator, denominator)

    def to_float(self) -> float:
        return self.numerator / self.denominator

    def cents(self) -> float:
        """Size of the interval in cents (1200 per octave)."""
        return 1200.0 * math.log2(self.numerator / self.denominator)

    def name(self) -> str:
        """Catalogue name of this ratio, or an empty string if it has none."""
        return INTERVAL_NAMES.get((self.numerator, self.denominator), "")

    def fret_position(self, scale_length: float, precision: Optional[int] = None) -> float:
        """Distance from the nut of the fret sounding this interval.

        Args:
            scale_length: Vibrating string length (any unit)
            precision: Decimal places to round to (None leaves it unrounded)

        Returns:
            Position in the same unit as scale_length
        """
        position = scale_length - (scale_length / self.numerator) * self.denominator
        if precision is None:
            return position
        return round(position, precision)

    def is_unison(self) -> bool:
        return self == UNISON

    def is_octave(self) -> bool:
        return self == OCTAVE

    def is_perfect(self) -> bool:
        """Unison, fourth, fifth or octave."""
        return self in PERFECT_INTERVALS

    @classmethod
    def from_pair(cls, pair: tuple[int, int]) -> "Interval":
        return cls(pair[0], pair[1])


# =============================================================================
# Well-known intervals
# =============================================================================

UNISON = Interval(1, 1)
OCTAVE = Interval(2, 1)
PERFECT_FOURTH = Interval(4, 3)
PERFECT_FIFTH = Interval(3, 2)
DIMINISHED_FIFTH = Interval(64, 45)

SYNTONIC_COMMA = Interval(81, 80)  # acute unison
GRAVE_UNISON = SYNTONIC_COMMA.reciprocal()

GREATER_MAJOR_SECOND = Interval(9, 8)
LESSER_MAJOR_SECOND = Interval(10, 9)
DIATONIC_SEMITONE = Interval(16, 15)
LESSER_MINOR_SEVENTH = Interval(16, 9)
GREATER_MINOR_SEVENTH = Interval(9, 5)

PERFECT_INTERVALS = frozenset({UNISON, PERFECT_FOURTH, PERFECT_FIFTH, OCTAVE})


# =============================================================================
# Named interval catalogue
# =============================================================================

# (numerator, denominator, name)
NAMED_INTERVALS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "Perfect Unison"),
    (225, 224, "Septimal Kleisma"),
    (81, 80, "Grave Unison"),
    (128, 125, "Dieses (Diminished Second)"),
    (25, 24, "Just (Lesser) Chromatic Semitone"),
    (256, 243, "Pythagorean Minor Second"),
    (135, 128, "Greater Chromatic Semitone"),
    (27, 25, "Acute Minor Second"),
    (16, 15, "Minor Second"),
    (15, 14, "Septimal Minor Second"),
    (10, 9, "Just (Lesser) Major Second"),
    (9, 8, "Pythagorean (Greater) Major Second"),
    (8, 7, "Septimal Major Second"),
    (6, 5, "Minor Third"),
    (5, 4, "Major Third"),
    (32, 27, "Diminished Fourth"),
    (81, 64, "Pythagorean Major Third"),
    (4, 3, "Perfect Fourth"),
    (45, 32, "Augmented Fourth"),
    (7, 5, "Septimal Augmented Fourth"),
    (1024, 729, "Pythagorean Diminished Fifth"),
    (729, 512, "Pythagorean Augmented Fourth"),
    (64, 45, "Diminished Fifth"),
    (10, 7, "Septimal Diminished Fifth"),
    (40, 27, "Grave Fifth"),
    (3, 2, "Perfect Fifth"),
    (8, 5, "Just Minor Sixth"),
    (128, 81, "Pythagorean Minor Sixth"),
    (5, 3, "Major Sixth"),
    (27, 16, "Pythagorean Major Sixth"),
    (16, 9, "Pythagorean (Lesser) Minor Seventh"),
    (9, 5, "Just (Greater) Minor Seventh"),
    (7, 4, "Septimal (Harmonic) Minor Seventh"),
    (15, 8, "Just Major Seventh"),
    (243, 128, "Pythagorean Major Seventh"),
    (2, 1, "Perfect Octave"),
)

# Read-only lookup: (numerator, denominator) -> name
INTERVAL_NAMES = MappingProxyType({
    (numerator, denominator): name
    for numerator, denominator, name in NAMED_INTERVALS
})
