# -*- coding: utf-8 -*-
"""
Era and aspect format catalog.

Both tables are built once from `constants` and never modified.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Tuple, Union

from .constants import (
    ASPECT_FORMATS,
    ERAS,
    EXPOSURE_CLASSES,
    FULL_COLOR_DEPTH,
    TONE_ADJUSTMENTS,
)


@dataclass(frozen=True)
class ToneAdjustment:
    name: str
    amount: float

    def __post_init__(self):
        if self.name not in TONE_ADJUSTMENTS:
            raise ValueError(f"Unknown tone adjustment: {self.name}")


@dataclass(frozen=True)
class EraDefinition:
    id: str
    name: str
    year: int
    tone: Tuple[ToneAdjustment, ...]
    color_depth: int
    exposure: str

    def __post_init__(self):
        if not 1 <= self.color_depth <= 32:
            raise ValueError(f"Color depth must be within 1..32, got {self.color_depth}")
        if self.exposure not in EXPOSURE_CLASSES:
            raise ValueError(f"Unknown exposure class: {self.exposure}")

    @property
    def full_color(self) -> bool:
        return self.color_depth >= FULL_COLOR_DEPTH

    @property
    def label(self) -> str:
        return f"{self.name} ({self.year})"


@dataclass(frozen=True)
class AspectFormat:
    id: str
    aspect: Fraction
    width: int
    height: int

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


def _build_eras():
    eras = []
    for entry in ERAS:
        tone = tuple(ToneAdjustment(name, float(amount)) for name, amount in entry['tone'])
        eras.append(EraDefinition(
            id=entry['id'],
            name=entry['name'],
            year=entry['year'],
            tone=tone,
            color_depth=entry['color_depth'],
            exposure=entry['exposure'],
        ))
    return tuple(eras)


def _build_formats():
    formats = {}
    for format_id, entry in ASPECT_FORMATS.items():
        width, height = entry['size']
        formats[format_id] = AspectFormat(
            id=format_id,
            aspect=Fraction(*entry['aspect']),
            width=width,
            height=height,
        )
    return formats


ERA_CATALOG = _build_eras()
FORMAT_CATALOG = _build_formats()

_ERA_INDEX = {era.id: position for position, era in enumerate(ERA_CATALOG)}


def era_ids():
    return [era.id for era in ERA_CATALOG]


def format_ids():
    return list(FORMAT_CATALOG)


def get_era(era: Union[str, EraDefinition]) -> EraDefinition:
    """Resolve an era identifier (or pass an EraDefinition through)."""
    if isinstance(era, EraDefinition):
        return era
    try:
        return ERA_CATALOG[_ERA_INDEX[era.lower()]]
    except (KeyError, AttributeError):
        raise KeyError(f"Unknown era: {era!r}") from None


def get_format(aspect: Union[str, AspectFormat]) -> AspectFormat:
    if isinstance(aspect, AspectFormat):
        return aspect
    try:
        return FORMAT_CATALOG[aspect.lower()]
    except (KeyError, AttributeError):
        raise KeyError(f"Unknown aspect format: {aspect!r}") from None


def era_position(era: Union[str, EraDefinition]) -> int:
    return _ERA_INDEX[get_era(era).id]


def previous_era(era: Union[str, EraDefinition]) -> EraDefinition:
    """The era before `era`, staying on the first one at the start."""
    return ERA_CATALOG[max(0, era_position(era) - 1)]


def next_era(era: Union[str, EraDefinition]) -> EraDefinition:
    """The era after `era`, staying on the last one at the end."""
    return ERA_CATALOG[min(len(ERA_CATALOG) - 1, era_position(era) + 1)]
