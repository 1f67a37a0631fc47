from .registry import FactorRegistry, get_registry
from .types import BagSize, SoilType, Sunlight, YieldBand

__all__ = [
    # Enums
    "BagSize",
    "SoilType",
    "Sunlight",
    "YieldBand",
    # Registry
    "FactorRegistry",
    "get_registry",
]
