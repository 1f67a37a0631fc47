"""
Factor registry: loads every multiplicative lookup table from YAML at
construction, validates it, and exposes a read-only query API.

Calculators receive a registry explicitly (defaulting to the module
singleton from get_registry()), so the factor tables are injected
configuration rather than package-level mutable state. Nothing writes to a
registry after construction.

Validation at load time checks that every enum member has an entry, that no
unknown keys are present, and that every factor lies inside the range
declared by its table. Corrupt data raises at construction, never at query
time.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional, TypeVar, cast

import yaml

from gardenplan.errors import CategoryError

from .types import BagSize, SoilType, Sunlight, YieldBand

_DATA_DIR = Path(__file__).parent / "data"
_FACTORS_FILE = "factors.yaml"

E = TypeVar("E", bound=Enum)


class FactorRegistry:
    """
    Read-only registry of all factor tables.

    All public tables are wrapped in MappingProxyType after loading and are
    immutable for the lifetime of the registry instance.

    Instantiate directly to use a custom data directory (e.g. in tests);
    otherwise use get_registry() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = data_dir

        # Type annotations only; actual assignment happens in _load_all
        self.yield_bands: MappingProxyType[YieldBand, float]
        self.sunlight_factors: MappingProxyType[Sunlight, float]
        self.soil_yield_factors: MappingProxyType[SoilType, float]
        self.soil_efficiency: MappingProxyType[SoilType, float]
        self.soil_efficiency_default: float
        self.bag_space_factors: MappingProxyType[BagSize, float]
        self.bag_size_multipliers: MappingProxyType[BagSize, float]
        self.crop_benchmarks: MappingProxyType[str, float]
        self.crop_benchmark_default: float
        # SHA-256 of the factor file; identifies these tables in cache keys
        self.digest: str = ""

        self._errors: list[str] = []
        self._load_all()
        if self._errors:
            raise ValueError(
                "Factor registry validation failed:\n"
                + "\n".join(f"  • {e}" for e in self._errors)
            )

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self._data_dir / filename
        try:
            with open(path) as f:
                text = f.read()
            self.digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
            return cast(dict[str, Any], yaml.safe_load(text))
        except FileNotFoundError:
            raise FileNotFoundError(f"Factor data file not found: {path}") from None
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse factor data file {path}: {exc}") from exc

    def _load_all(self) -> None:
        data = self._load_yaml(_FACTORS_FILE)
        if not isinstance(data, dict):
            raise ValueError(f"Factor data file {self._data_dir / _FACTORS_FILE} is empty")

        self.yield_bands = self._load_enum_table(data, "yield_bands", YieldBand)
        self.sunlight_factors = self._load_enum_table(data, "sunlight_factors", Sunlight)
        self.soil_yield_factors = self._load_enum_table(data, "soil_yield_factors", SoilType)
        self.soil_efficiency = self._load_enum_table(data, "soil_efficiency", SoilType)
        self.soil_efficiency_default = self._load_default(data, "soil_efficiency")
        self.bag_space_factors = self._load_enum_table(data, "bag_space_factors", BagSize)
        self.bag_size_multipliers = self._load_enum_table(data, "bag_size_multipliers", BagSize)
        self.crop_benchmarks = self._load_open_table(data, "crop_benchmarks")
        self.crop_benchmark_default = self._load_default(data, "crop_benchmarks")

    def _table(self, data: dict[str, Any], name: str) -> Optional[dict[str, Any]]:
        table = data.get(name)
        if not isinstance(table, dict) or not isinstance(table.get("entries"), dict):
            self._errors.append(f"table {name!r} is missing or has no entries mapping")
            return None
        return table

    def _check_range(self, name: str, table: dict[str, Any], key: str, value: Any) -> float:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            self._errors.append(f"{name}[{key!r}]: value {value!r} is not a number")
            return 0.0
        low, high = table.get("range", (0.0, float("inf")))
        if not (low <= value <= high):
            self._errors.append(f"{name}[{key!r}]: value {value} outside declared range [{low}, {high}]")
        return float(value)

    def _load_enum_table(
        self, data: dict[str, Any], name: str, enum_cls: type[E]
    ) -> MappingProxyType[E, float]:
        table = self._table(data, name)
        if table is None:
            return MappingProxyType({})
        result: dict[E, float] = {}
        for key, value in table["entries"].items():
            try:
                member = enum_cls(key)
            except ValueError:
                self._errors.append(f"{name}: unknown {enum_cls.__name__} key {key!r}")
                continue
            result[member] = self._check_range(name, table, key, value)
        for member in enum_cls:
            if member not in result:
                self._errors.append(f"{name}: no entry for {enum_cls.__name__}.{member.name}")
        return MappingProxyType(result)

    def _load_open_table(self, data: dict[str, Any], name: str) -> MappingProxyType[str, float]:
        table = self._table(data, name)
        if table is None:
            return MappingProxyType({})
        return MappingProxyType(
            {
                str(key).strip().lower(): self._check_range(name, table, key, value)
                for key, value in table["entries"].items()
            }
        )

    def _load_default(self, data: dict[str, Any], name: str) -> float:
        table = data.get(name) or {}
        if "default" not in table:
            self._errors.append(f"table {name!r} has no default")
            return 0.0
        return self._check_range(name, table, "default", table["default"])

    # ── Query API ──────────────────────────────────────────────────────────────

    def get_yield_factor(self, bag_size: BagSize) -> float:
        """Base grams/day per bag for the size's yield band."""
        return self.yield_bands[bag_size.yield_band]

    def get_sunlight_factor(self, sunlight: Sunlight) -> float:
        return self.sunlight_factors[sunlight]

    def get_soil_yield_factor(self, soil_type: SoilType) -> float:
        return self.soil_yield_factors[soil_type]

    def get_soil_efficiency(self, soil_type: SoilType | str | None) -> float:
        """
        Space-efficiency multiplier for *soil_type*.

        Unknown or missing soil falls back to the table default.
        """
        if soil_type is None:
            return self.soil_efficiency_default
        try:
            member = SoilType.parse(soil_type)
        except CategoryError:
            return self.soil_efficiency_default
        return self.soil_efficiency.get(member, self.soil_efficiency_default)

    def get_bag_space_factor(self, bag_size: BagSize) -> float:
        """Square feet of garden consumed by one bag of *bag_size*."""
        return self.bag_space_factors[bag_size]

    def get_bag_size_multiplier(self, bag_size: BagSize) -> float:
        return self.bag_size_multipliers[bag_size]

    def get_crop_benchmark(self, crop_name: Optional[str]) -> float:
        """Expected grams/day per 10" bag for *crop_name*, or the default."""
        if not crop_name:
            return self.crop_benchmark_default
        return self.crop_benchmarks.get(crop_name.strip().lower(), self.crop_benchmark_default)


# ── Module-level singleton ─────────────────────────────────────────────────────
#
# Initialized eagerly at import time so there is no lazy-init race condition
# in concurrent contexts. The registry is read-only after construction.

_registry: FactorRegistry = FactorRegistry()


def get_registry() -> FactorRegistry:
    """Return the module-level registry singleton."""
    return _registry
