"""Just intonation and Pythagorean scale generators.

Every generator here returns an ascending list of exact Intervals with
the tonic left implicit, ending on an octave.
"""

from enum import Enum
from functools import reduce
from itertools import product

from .intervals import (
    DIATONIC_SEMITONE,
    DIMINISHED_FIFTH,
    GRAVE_UNISON,
    GREATER_MAJOR_SECOND,
    GREATER_MINOR_SEVENTH,
    Interval,
    LESSER_MAJOR_SECOND,
    LESSER_MINOR_SEVENTH,
    OCTAVE,
    PERFECT_FIFTH,
    SYNTONIC_COMMA,
    UNISON,
)

# =============================================================================
# Pythagorean
# =============================================================================

# Fifths stacked either side of the tonic for the chromatic scale
PYTHAGOREAN_FIFTHS = 6


def pythagorean_ratios() -> list[Interval]:
    """The 12-tone Pythagorean chromatic scale plus the octave.

    Stacks 3:2 from six fifths below the tonic to six above, octave
    reducing each step. Both tritones (1024:729 and 729:512) survive.
    """
    ratios = [
        PERFECT_FIFTH.power(fifths).octave_reduce()
        for fifths in range(-PYTHAGOREAN_FIFTHS, PYTHAGOREAN_FIFTHS + 1)
        if fifths != 0
    ]
    ratios.append(OCTAVE)
    return sorted(ratios)


def five_limit_from_pythagorean() -> list[Interval]:
    """5-limit chromatic scale from comma-adjusting the Pythagorean one.

    Perfect intervals are kept. Every other degree is moved up and down by
    a syntonic comma (81:80) and the candidate with the smaller
    denominator wins, e.g. 81:64 -> 5:4 and 256:243 -> 16:15.
    """
    ratios = []
    for ratio in pythagorean_ratios():
        if ratio.is_perfect():
            ratios.append(ratio)
            continue

        acute = ratio.compose(SYNTONIC_COMMA).octave_reduce()
        grave = ratio.compose(GRAVE_UNISON).octave_reduce()
        ratios.append(acute if acute.denominator < grave.denominator else grave)

    # The two tritones swap order once adjusted (64:45 vs 45:32)
    return sorted(ratios)


# =============================================================================
# N-limit just intonation from partial ratios
# =============================================================================

class Symmetry(Enum):
    """Which of the competing major seconds and minor sevenths to keep.

    ASYMMETRIC keeps 10:9 and 16:9, SYMMETRIC1 keeps 10:9 and its
    inversion 9:5, SYMMETRIC2 keeps 9:8 and its inversion 16:9.
    """
    NONE = "none"
    ASYMMETRIC = "asymmetric"
    SYMMETRIC1 = "symmetric1"
    SYMMETRIC2 = "symmetric2"

    def excludes(self, interval: Interval) -> bool:
        return interval in _SYMMETRY_EXCLUSIONS[self]


_SYMMETRY_EXCLUSIONS: dict[Symmetry, frozenset[Interval]] = {
    Symmetry.NONE: frozenset(),
    Symmetry.ASYMMETRIC: frozenset({GREATER_MAJOR_SECOND, GREATER_MINOR_SEVENTH}),
    Symmetry.SYMMETRIC1: frozenset({GREATER_MAJOR_SECOND, LESSER_MINOR_SEVENTH}),
    Symmetry.SYMMETRIC2: frozenset({LESSER_MAJOR_SECOND, GREATER_MINOR_SEVENTH}),
}

# Multipliers contributed by each partial: prime -> ratios
PARTIAL_MULTIPLIERS: dict[int, tuple[Interval, ...]] = {
    3: (Interval(1, 9), Interval(1, 3), UNISON, Interval(3, 1), Interval(9, 1)),
    5: (Interval(1, 5), UNISON, Interval(5, 1)),
    7: (Interval(1, 7), UNISON, Interval(7, 1)),
    13: (Interval(1, 13), UNISON, Interval(13, 1)),
}

# Partials crossed together for each supported prime limit
LIMIT_PARTIALS: dict[int, tuple[int, ...]] = {
    5: (3, 5),
    7: (3, 5, 7),
    13: (3, 5, 7, 13),
}

SUPPORTED_LIMITS = tuple(LIMIT_PARTIALS)

# Semitone bins that receive a scale degree (0 and 12 sit a comma from
# the unison and octave)
SEMITONE_BINS = range(1, 12)


def multiplier_table(limit: int) -> list[Interval]:
    """Octave-reduced products of every combination of partial multipliers.

    Args:
        limit: Prime limit (5, 7 or 13)

    Returns:
        One octave-reduced Interval per combination, duplicates included
    """
    if limit not in LIMIT_PARTIALS:
        raise ValueError(f"Unsupported prime limit {limit}, expected one of {SUPPORTED_LIMITS}")

    partial_lists = [PARTIAL_MULTIPLIERS[p] for p in LIMIT_PARTIALS[limit]]
    return [
        reduce(Interval.compose, factors, UNISON).octave_reduce()
        for factors in product(*partial_lists)
    ]


def semitone_bin(interval: Interval) -> int:
    """Nearest 12-TET semitone (0..12) to an octave-reduced interval."""
    return round(interval.cents() / 100.0)


def select_simplest_per_semitone(pool: list[Interval]) -> list[Interval]:
    """Collapse a pool of ratios to one per semitone.

    Each ratio is binned by its nearest semitone; within a bin the ratio
    with the smallest (numerator, denominator) pair wins.
    """
    chosen: dict[int, Interval] = {}
    for ratio in pool:
        bin_index = semitone_bin(ratio)
        if bin_index not in SEMITONE_BINS:
            continue
        current = chosen.get(bin_index)
        if current is None or (ratio.numerator, ratio.denominator) < (current.numerator, current.denominator):
            chosen[bin_index] = ratio
    return [chosen[b] for b in sorted(chosen)]


def just_ratios(limit: int = 5, symmetry: Symmetry = Symmetry.ASYMMETRIC) -> list[Interval]:
    """Chromatic just intonation scale built from partial ratios.

    Args:
        limit: Prime limit (5, 7 or 13)
        symmetry: Which competing seconds/sevenths are excluded

    Returns:
        Ascending Intervals ending on the octave. The 5-limit scale keeps
        the whole multiplier pool; higher limits keep one ratio per
        semitone.
    """
    pool: list[Interval] = []
    for ratio in multiplier_table(limit):
        if ratio.is_unison() or ratio == DIMINISHED_FIFTH:
            continue
        if symmetry.excludes(ratio):
            continue
        if ratio not in pool:
            pool.append(ratio)

    if limit > 5:
        pool = select_simplest_per_semitone(pool)

    pool.append(OCTAVE)
    return sorted(pool)


# =============================================================================
# Ptolemy's intense diatonic
# =============================================================================

_T = GREATER_MAJOR_SECOND   # 9:8
_t = LESSER_MAJOR_SECOND    # 10:9
_s = DIATONIC_SEMITONE      # 16:15

DIATONIC_MODES: dict[str, tuple[Interval, ...]] = {
    "Lydian": (_T, _t, _T, _s, _t, _T, _s),
    "Ionian": (_T, _t, _s, _T, _t, _T, _s),
    "Mixolydian": (_T, _t, _s, _T, _t, _s, _T),
    "Dorian": (_T, _s, _t, _T, _t, _s, _T),
    "Aeolian": (_T, _s, _t, _T, _s, _T, _t),
    "Phrygian": (_s, _T, _t, _T, _s, _t, _T),
    "Locrian": (_s, _T, _t, _s, _T, _t, _T),
}


def is_valid_diatonic_mode(mode: str) -> bool:
    return mode in DIATONIC_MODES


def diatonic_ratios(mode: str = "Ionian", octaves: int = 1) -> list[Interval]:
    """Scale degrees of a diatonic mode, stepping up from the tonic.

    Steps are stacked cumulatively, so the second octave continues past
    2:1 (9:4, 5:2, ...) rather than repeating the first.

    Args:
        mode: Name of the mode (see DIATONIC_MODES)
        octaves: Number of octaves to span

    Returns:
        7 * octaves ascending Intervals
    """
    if not is_valid_diatonic_mode(mode):
        raise ValueError(f"Unknown diatonic mode {mode!r}")
    if octaves < 1:
        raise ValueError(f"Octaves must be >= 1, got {octaves}")

    ratios = []
    ratio = UNISON
    for _ in range(octaves):
        for step in DIATONIC_MODES[mode]:
            ratio = ratio.compose(step)
            ratios.append(ratio)
    return ratios


# =============================================================================
# Saz
# =============================================================================

# Traditional bağlama (cura) fretting
SAZ_RATIOS: tuple[Interval, ...] = tuple(Interval.from_pair(pair) for pair in (
    (18, 17), (12, 11), (9, 8), (81, 68), (27, 22), (81, 64), (4, 3), (24, 17),
    (16, 11), (3, 2), (27, 17), (18, 11), (27, 16), (16, 9), (32, 17), (64, 33),
    (2, 1),
))


def saz_ratios() -> list[Interval]:
    return list(SAZ_RATIOS)
