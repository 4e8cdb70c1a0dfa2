"""Equal division of the octave (EDO).

Divides the octave into N geometrically equal steps. The ratios are
irrational, so everything here is floating point.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Division:
    """One step of an equally divided octave."""
    ratio: float
    cents: float


def division_in_cents(ratio: float) -> float:
    """Size of a ratio in whole cents."""
    if ratio <= 0:
        raise ValueError(f"Ratio must be positive, got {ratio}")
    return float(round(math.log2(ratio) * 1200))


def division(step: int, divisions: int) -> Division:
    """The `step`-th division of an N-EDO octave.

    Args:
        step: Step number (1..divisions, larger values continue upward)
        divisions: Number of equal divisions of the octave

    Returns:
        Division with ratio 2^(step/divisions) and its size in cents
    """
    ratio = 2.0 ** (step / divisions)
    return Division(ratio=ratio, cents=division_in_cents(ratio))


def equal_divisions(divisions: int) -> list[Division]:
    """All steps of an N-EDO octave, ascending, ending on the octave.

    Args:
        divisions: Number of equal divisions (must be >= 1)

    Returns:
        `divisions` Division entries, the last one being 2:1 / 1200 cents

    Examples:
        >>> [d.cents for d in equal_divisions(4)]
        [300.0, 600.0, 900.0, 1200.0]
    """
    if divisions < 1:
        raise ValueError(f"Number of divisions must be >= 1, got {divisions}")
    return [division(step, divisions) for step in range(1, divisions + 1)]
