"""Fretboard rendering.

Turns an ordered scale (exact intervals, equal divisions or tempered
ratios) plus a scale length into labelled fret positions. Every tuning
system goes through one of the renderers below.
"""

import json
from dataclasses import dataclass, field

from . import config
from .edo import Division
from .intervals import Interval, UNISON
from .tempered import TemperedScale


@dataclass(frozen=True)
class Fret:
    """One fret: where it goes and what it sounds."""
    label: str
    position: float  # Distance from the nut, same unit as the scale length
    comment: str = ""
    interval: str = ""  # Interval from the previous fret, e.g. "16:15"

    def to_dict(self) -> dict:
        data: dict = {"label": self.label, "position": self.position}
        if self.comment:
            data["comment"] = self.comment
        if self.interval:
            data["interval"] = self.interval
        return data


@dataclass(frozen=True)
class Fretboard:
    """Fret layout for one tuning system on one scale length."""
    system: str
    description: str
    scale_length: float
    frets: tuple[Fret, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data: dict = {"system": self.system}
        if self.description:
            data["description"] = self.description
        data["scaleLength"] = self.scale_length
        data["frets"] = [f.to_dict() for f in self.frets]
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def just_frets(
    scale_length: float,
    intervals: list[Interval],
    precision: int = config.JUST_POSITION_PRECISION,
) -> list[Fret]:
    """Frets for a scale of exact ratios.

    Args:
        scale_length: Vibrating string length
        intervals: Ascending ratios from the tonic (tonic not included)
        precision: Decimal places for positions

    Returns:
        One Fret per interval, labelled "num:den" and annotated with the
        catalogue name and the step from the previous fret
    """
    frets = []
    previous = UNISON
    for interval in intervals:
        frets.append(Fret(
            label=str(interval),
            position=interval.fret_position(scale_length, precision),
            comment=interval.name(),
            interval=str(interval.difference(previous)),
        ))
        previous = interval
    return frets


def equal_frets(
    scale_length: float,
    divisions: list[Division],
    octaves: int = 1,
    precision: int = config.EQUAL_POSITION_PRECISION,
) -> list[Fret]:
    """Frets for an equally divided octave, labelled in cents.

    The open string is included as a "0.00 cents" fret at the nut. For
    more than one octave the divisions repeat, each octave halving the
    remaining string.
    """
    frets = [Fret(label=f"{0.0:.2f} cents", position=0.0)]
    for octave in range(octaves):
        for step in divisions:
            remaining = scale_length / step.ratio / 2 ** octave
            frets.append(Fret(
                label=f"{step.cents + octave * 1200:.2f} cents",
                position=round(scale_length - remaining, precision),
            ))
    return frets


def tempered_frets(
    scale_length: float,
    scale: TemperedScale,
    precision: int,
    ratio_digits: int,
) -> list[Fret]:
    """Frets for a tempered scale, numbered and named, plus the octave.

    The tonic (first ratio) is the open string and gets no fret. Ratio
    and step sizes are reported in the comment.

    Args:
        scale_length: Vibrating string length
        scale: Tempered ratios and their names
        precision: Decimal places for positions
        ratio_digits: Decimal places for the ratio in the comment
    """
    frets = []
    previous = 1.0
    for number, ratio in enumerate(scale.ratios):
        if number == 0:
            continue
        frets.append(Fret(
            label=f"{number} ({scale.name_of(number)})",
            position=round(scale_length - scale_length / ratio, precision),
            comment=f"ratio: {ratio:.{ratio_digits}f}; interval: {ratio / previous:.6f}",
        ))
        previous = ratio

    frets.append(Fret(
        label=f"{len(frets) + 1} (Octave)",
        position=scale_length / 2,
        comment=f"ratio: {2.0:.1f}; interval: {2.0 / previous:.6f}",
    ))
    return frets
