"""Tuning system selection and request validation.

Each tuning system is a small frozen dataclass holding its already
validated configuration. `parse_request` is the only place textual
parameters are interpreted; `build_fretboard` is the only place a system
is turned into frets.
"""

import math
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from . import config
from .edo import equal_divisions
from .fretboard import Fretboard, equal_frets, just_frets, tempered_frets
from .just import (
    SUPPORTED_LIMITS,
    Symmetry,
    diatonic_ratios,
    five_limit_from_pythagorean,
    is_valid_diatonic_mode,
    just_ratios,
    pythagorean_ratios,
    saz_ratios,
)
from .tempered import meantone_scale, well_tempered_scale


class FretboardRequestError(ValueError):
    """A request that cannot be turned into a fretboard."""


# =============================================================================
# Tuning systems
# =============================================================================

@dataclass(frozen=True)
class EqualTemperament:
    divisions: int = config.DEFAULT_EQUAL_DIVISIONS
    octaves: int = config.DEFAULT_OCTAVES


@dataclass(frozen=True)
class Saz:
    pass


@dataclass(frozen=True)
class Pythagorean:
    pass


@dataclass(frozen=True)
class Meantone:
    extended: bool = False


@dataclass(frozen=True)
class PtolemyDiatonic:
    mode: str = config.DEFAULT_DIATONIC_MODE
    octaves: int = config.DEFAULT_OCTAVES


@dataclass(frozen=True)
class FiveLimitFromPythagorean:
    pass


@dataclass(frozen=True)
class JustFromRatios:
    limit: int = config.DEFAULT_JUST_LIMIT
    symmetry: Symmetry = Symmetry(config.DEFAULT_JUST_SYMMETRY)


@dataclass(frozen=True)
class BachWellTemperament:
    pass


TuningSystem = Union[
    EqualTemperament,
    Saz,
    Pythagorean,
    Meantone,
    PtolemyDiatonic,
    FiveLimitFromPythagorean,
    JustFromRatios,
    BachWellTemperament,
]


# =============================================================================
# Parameter parsing
# =============================================================================

def parse_scale_length(value: Optional[str]) -> float:
    """Parse a scale length, which must be a number greater than zero.

    Raises:
        FretboardRequestError: If missing, non-numeric or not positive
    """
    try:
        scale_length = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise FretboardRequestError("a numeric scaleLength greater than zero is required") from None
    if not (math.isfinite(scale_length) and scale_length > 0):
        raise FretboardRequestError("a numeric scaleLength greater than zero is required")
    return scale_length


def parse_positive_int(
    params: Mapping[str, str],
    key: str,
    fallback: int,
    maximum: Optional[int] = None,
) -> int:
    """Read a positive integer parameter, using the fallback if absent or invalid.

    Values above `maximum` (when given) count as invalid.
    """
    value = params.get(key)
    if not value:
        return fallback
    try:
        number = int(value)
    except ValueError:
        return fallback
    if number < 1 or (maximum is not None and number > maximum):
        return fallback
    return number


def parse_diatonic_mode(params: Mapping[str, str]) -> str:
    mode = params.get("diatonicMode") or params.get("mode") or ""
    return mode if is_valid_diatonic_mode(mode) else config.DEFAULT_DIATONIC_MODE


def parse_symmetry(params: Mapping[str, str]) -> Symmetry:
    try:
        return Symmetry(params.get("justSymmetry") or config.DEFAULT_JUST_SYMMETRY)
    except ValueError:
        return Symmetry(config.DEFAULT_JUST_SYMMETRY)


def parse_limit(params: Mapping[str, str]) -> int:
    limit = parse_positive_int(params, "limit", config.DEFAULT_JUST_LIMIT)
    return limit if limit in SUPPORTED_LIMITS else config.DEFAULT_JUST_LIMIT


# Selector -> builder of the validated system
SYSTEM_PARSERS: dict[str, Callable[[Mapping[str, str]], TuningSystem]] = {
    "equal": lambda p: EqualTemperament(
        divisions=parse_positive_int(p, "divisions", config.DEFAULT_EQUAL_DIVISIONS, config.MAX_EQUAL_DIVISIONS),
        octaves=parse_positive_int(p, "octaves", config.DEFAULT_OCTAVES, config.MAX_OCTAVES),
    ),
    "saz": lambda p: Saz(),
    "pythagorean": lambda p: Pythagorean(),
    "meantone": lambda p: Meantone(extended=False),
    "extendedMeantone": lambda p: Meantone(extended=True),
    "ptolemy": lambda p: PtolemyDiatonic(
        mode=parse_diatonic_mode(p),
        octaves=parse_positive_int(p, "octaves", config.DEFAULT_OCTAVES, config.MAX_OCTAVES),
    ),
    "just5limitFromPythagorean": lambda p: FiveLimitFromPythagorean(),
    "just5limitFromRatios": lambda p: JustFromRatios(limit=5, symmetry=parse_symmetry(p)),
    "just7limitFromRatios": lambda p: JustFromRatios(limit=7, symmetry=parse_symmetry(p)),
    "just13limitFromRatios": lambda p: JustFromRatios(limit=13, symmetry=parse_symmetry(p)),
    "justFromRatios": lambda p: JustFromRatios(limit=parse_limit(p), symmetry=parse_symmetry(p)),
    "bachWellTemperament": lambda p: BachWellTemperament(),
}
SYSTEM_PARSERS["diatonic"] = SYSTEM_PARSERS["ptolemy"]


@dataclass(frozen=True)
class FretboardRequest:
    scale_length: float
    system: TuningSystem


def parse_request(params: Mapping[str, str]) -> FretboardRequest:
    """Validate textual request parameters.

    Args:
        params: Parameter name -> value, e.g. {"scaleLength": "540",
            "tuningSystem": "pythagorean"}

    Returns:
        FretboardRequest with a positive scale length and a configured system

    Raises:
        FretboardRequestError: For an invalid scale length or unknown system
    """
    scale_length = parse_scale_length(params.get("scaleLength"))

    selector = params.get("tuningSystem") or config.DEFAULT_TUNING_SYSTEM
    parser = SYSTEM_PARSERS.get(selector)
    if parser is None:
        raise FretboardRequestError("please provide a valid tuning system")

    return FretboardRequest(scale_length=scale_length, system=parser(params))


# =============================================================================
# Dispatch
# =============================================================================

def build_fretboard(scale_length: float, system: TuningSystem) -> Fretboard:
    """Compute the fretboard for a validated tuning system."""
    if isinstance(system, EqualTemperament):
        return Fretboard(
            system=f"{system.divisions}-TET",
            description=f"Fret positions for {system.divisions}-tone equal temperament.",
            scale_length=scale_length,
            frets=tuple(equal_frets(scale_length, equal_divisions(system.divisions), system.octaves)),
        )

    if isinstance(system, Saz):
        return Fretboard(
            system="saz",
            description="Fret positions for traditional Turkish Saz tuning ratios.",
            scale_length=scale_length,
            frets=tuple(just_frets(scale_length, saz_ratios())),
        )

    if isinstance(system, Pythagorean):
        return Fretboard(
            system="Pythagorean",
            description="Fret positions based on 3-limit Pythagorean ratios.",
            scale_length=scale_length,
            frets=tuple(just_frets(scale_length, pythagorean_ratios())),
        )

    if isinstance(system, Meantone):
        extended = "extended " if system.extended else ""
        return Fretboard(
            system="meantone",
            description=(
                f"Fret positions for {extended}meantone computed by narrowing of fifths by "
                f"{config.MEANTONE_COMMA_FRACTION:.2f} of a syntonic comma (81/80).  "
                "Nominal note names used given a tonic of D."
            ),
            scale_length=scale_length,
            frets=tuple(tempered_frets(
                scale_length,
                meantone_scale(extended=system.extended),
                precision=config.MEANTONE_POSITION_PRECISION,
                ratio_digits=3,
            )),
        )

    if isinstance(system, PtolemyDiatonic):
        return Fretboard(
            system="Ptolemy",
            description=f"Fret positions for Ptolemy's 5-limit intense diatonic scale in {system.mode} mode.",
            scale_length=scale_length,
            frets=tuple(just_frets(scale_length, diatonic_ratios(system.mode, system.octaves))),
        )

    if isinstance(system, FiveLimitFromPythagorean):
        return Fretboard(
            system="5-limit Just Intonation",
            description=(
                "Fret positions for chromatic scale based on 5-limit just intonation pure ratios "
                "derived from applying syntonic comma to Pythagorean ratios."
            ),
            scale_length=scale_length,
            frets=tuple(just_frets(scale_length, five_limit_from_pythagorean())),
        )

    if isinstance(system, JustFromRatios):
        return Fretboard(
            system=f"{system.limit}-limit Just Intonation",
            description=(
                f"Fret positions for chromatic scale based on {system.limit}-limit just intonation "
                f"pure ratios ({system.symmetry.value})."
            ),
            scale_length=scale_length,
            frets=tuple(just_frets(scale_length, just_ratios(system.limit, system.symmetry))),
        )

    if isinstance(system, BachWellTemperament):
        return Fretboard(
            system="Bach's Well-Tempered Tuning",
            description=(
                "Fret positions derived from Lehman's decoding of Bach's Well-Tempered tuning, "
                "using sixth-comma, twelfth-comma, and pure fifths."
            ),
            scale_length=scale_length,
            frets=tuple(tempered_frets(
                scale_length,
                well_tempered_scale(),
                precision=config.WELL_TEMPERED_POSITION_PRECISION,
                ratio_digits=6,
            )),
        )

    raise TypeError(f"Unknown tuning system {system!r}")


def fretboard_for_request(params: Mapping[str, str]) -> Fretboard:
    """Validate request parameters and compute the fretboard."""
    request = parse_request(params)
    return build_fretboard(request.scale_length, request.system)
