"""
Structural cache fingerprints.

A Fingerprint is a frozen, hashable record of every input that affects a
calculator's result, tagged with the kind of result it identifies. Keys are
compared structurally, so two different calculators can never collide on a
formatted string. ``Fingerprint.key`` renders a deterministic string form for
logging and for callers that need one.

Floats are rendered with ``repr`` so distinct values never share a key. The
EngineConfig a result was computed under is part of every fingerprint; its
string form is abbreviated to a digest of its repr. Yield fingerprints also
carry the factor registry digest, since the factor tables feed the result.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gardenplan.calculator.layout import OptimizationConfig
from gardenplan.config import EngineConfig
from gardenplan.registry.types import BagSize, SoilType, Sunlight
from gardenplan.utilities.types import Dimensions, LengthUnit


class ResultKind(str, Enum):
    """The calculator a cached value came from."""

    GARDEN_SPACE = "garden_space"
    LAYOUT = "layout"
    YIELD = "yield"


@dataclass(frozen=True)
class Fingerprint:
    kind: ResultKind
    inputs: tuple[tuple[str, Any], ...]

    @property
    def key(self) -> str:
        parts = "|".join(f"{name}={_render(value)}" for name, value in self.inputs)
        return f"{self.kind.value}:{parts}"

    def __str__(self) -> str:
        return self.key


def _render(value: Any) -> str:
    if isinstance(value, EngineConfig):
        return hashlib.sha256(repr(value).encode("utf-8")).hexdigest()[:16]
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _dimension_inputs(dims: Dimensions) -> tuple[tuple[str, Any], ...]:
    return (
        ("length", float(dims.length)),
        ("width", float(dims.width)),
        ("unit", dims.unit),
    )


def garden_space_fingerprint(
    dims: Dimensions,
    output_unit: LengthUnit,
    include_corners: bool,
    config: EngineConfig,
) -> Fingerprint:
    return Fingerprint(
        kind=ResultKind.GARDEN_SPACE,
        inputs=_dimension_inputs(dims)
        + (
            ("output_unit", output_unit),
            ("include_corners", include_corners),
            ("config", config),
        ),
    )


def layout_fingerprint(
    dims: Dimensions,
    bag_diameter: float,
    opt: OptimizationConfig,
    config: EngineConfig,
) -> Fingerprint:
    return Fingerprint(
        kind=ResultKind.LAYOUT,
        inputs=_dimension_inputs(dims)
        + (
            ("bag_diameter", float(bag_diameter)),
            ("include_corner_spaces", opt.include_corner_spaces),
            ("min_path_width", float(opt.min_path_width)),
            ("preferred_orientation", opt.preferred_orientation),
            ("spacing_multiplier", float(opt.spacing_multiplier)),
            ("config", config),
        ),
    )


def yield_fingerprint(
    bag_size: BagSize,
    grow_bag_count: int,
    sunlight: Sunlight,
    soil_type: SoilType,
    config: EngineConfig,
    registry_digest: str,
) -> Fingerprint:
    """Fingerprint canonical (already validated) yield inputs."""
    return Fingerprint(
        kind=ResultKind.YIELD,
        inputs=(
            ("bag_size", bag_size),
            ("grow_bag_count", int(grow_bag_count)),
            ("sunlight", sunlight),
            ("soil_type", soil_type),
            ("config", config),
            ("registry", registry_digest),
        ),
    )
