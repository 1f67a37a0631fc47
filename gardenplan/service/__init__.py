from .calculator import GardenCalculator

__all__ = ["GardenCalculator"]
