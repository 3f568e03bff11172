"""
Cell Formula Registry

This module provides a registry of named cell formulas for the pointwise
raster algebra, tracking for each formula:
- The function applied to every valid cell
- Its arity (1: f(value), 2: f(value, operand))
- Metadata (description, output units)

Formulas may be passed to apply_unary/apply_binary either as callables or by
registered name.
"""

from typing import Callable, Dict, List, Optional
from dataclasses import dataclass
import logging

from ..core.core_types import FormulaSpec
from ..core.exceptions import DataProcessingError

logger = logging.getLogger(__name__)

# ============================================================================
# Registry Data Structures
# ============================================================================

@dataclass
class CellFormula:
    """
    A named cell formula.

    Attributes:
        name: Formula name (e.g., 'kelvin_to_celsius')
        func: Function applied to each valid cell value
        arity: 1 for f(value), 2 for f(value, operand)
        description: Short description
        units: Units of the result, if the formula converts units
    """
    name: str
    func: Callable[..., float]
    arity: int = 1
    description: str = ""
    units: str = ""

    def __post_init__(self):
        if self.arity not in (1, 2):
            raise ValueError(f"Formula arity must be 1 or 2, got {self.arity}")


class FormulaRegistry:
    """Registry of named cell formulas."""

    def __init__(self):
        self._registry: Dict[str, CellFormula] = {}
        logger.debug("Initialized cell formula registry")

    def register(
        self,
        name: str,
        func: Callable[..., float],
        arity: int = 1,
        description: str = "",
        units: str = "",
    ) -> None:
        """
        Register a cell formula.

        Args:
            name: Formula name
            func: Function to apply to each cell
            arity: Number of arguments (1 or 2)
            description: Short description
            units: Units of the result
        """
        if name in self._registry:
            logger.warning(f"Cell formula '{name}' already registered, overwriting")

        self._registry[name] = CellFormula(
            name=name, func=func, arity=arity, description=description, units=units
        )
        logger.debug(f"Registered cell formula: {name}")

    def is_registered(self, name: str) -> bool:
        return name in self._registry

    def get(self, name: str) -> Optional[CellFormula]:
        return self._registry.get(name)

    def list_all(self, arity: Optional[int] = None) -> List[str]:
        """List registered formula names, optionally only those of one arity."""
        return sorted(
            name for name, item in self._registry.items()
            if arity is None or item.arity == arity
        )

    def get_metadata(self, name: str) -> Dict[str, str]:
        if name not in self._registry:
            raise KeyError(f"Cell formula '{name}' not registered")
        item = self._registry[name]
        return {
            'arity': str(item.arity),
            'description': item.description,
            'units': item.units,
        }

    def __repr__(self) -> str:
        return f"FormulaRegistry({len(self._registry)} formulas registered)"


# ============================================================================
# Global Registry Instance
# ============================================================================

_global_registry = FormulaRegistry()


def get_registry() -> FormulaRegistry:
    """Get the global cell formula registry."""
    return _global_registry


def register_formula(name: str, arity: int = 1, description: str = "", units: str = ""):
    """
    Decorator to register a cell formula.

    Example:
        @register_formula('feet_to_meters', units='m')
        def feet_to_meters(value):
            return value * 0.3048
    """
    def decorator(func: Callable[..., float]) -> Callable[..., float]:
        _global_registry.register(
            name=name, func=func, arity=arity, description=description, units=units
        )
        return func

    return decorator


def get_formula(name: str) -> CellFormula:
    """
    Look up a registered formula.

    Raises:
        KeyError: If the name is not registered
    """
    item = _global_registry.get(name)
    if item is None:
        raise KeyError(
            f"Cell formula '{name}' not registered. Available: {_global_registry.list_all()}"
        )
    return item


def list_formulas(arity: Optional[int] = None) -> List[str]:
    """List registered formula names, optionally only those of one arity."""
    return _global_registry.list_all(arity)


def resolve_formula(formula: FormulaSpec, arity: int) -> Callable[..., float]:
    """
    Turn a callable or a registered formula name into a callable.

    Raises:
        KeyError: If the name is not registered
        DataProcessingError: If the registered formula has a different arity
    """
    if callable(formula):
        return formula

    item = get_formula(formula)
    if item.arity != arity:
        raise DataProcessingError(
            "formula lookup",
            f"'{formula}' takes {item.arity} argument(s), operation needs {arity}"
        )
    return item.func

# ============================================================================
# Built-in Formulas
# ============================================================================

@register_formula('kelvin_to_celsius', description='Kelvin to degrees Celsius', units='degC')
def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - 273.0


@register_formula('kelvin_to_fahrenheit', description='Kelvin to degrees Fahrenheit', units='degF')
def kelvin_to_fahrenheit(kelvin: float) -> float:
    celsius = kelvin - 273.0
    return 1.8 * celsius + 32.0


@register_formula('celsius_to_fahrenheit', description='Degrees Celsius to degrees Fahrenheit', units='degF')
def celsius_to_fahrenheit(celsius: float) -> float:
    return 1.8 * celsius + 32.0


@register_formula('divide_by', arity=2, description='Divide each cell by the operand')
def divide_by(value: float, divisor: float) -> float:
    return value / divisor


@register_formula('set_constant', arity=2, description='Replace each cell by the operand')
def set_constant(value: float, constant: float) -> float:
    return constant


__all__ = [
    'CellFormula',
    'FormulaRegistry',
    'get_registry',
    'register_formula',
    'get_formula',
    'list_formulas',
    'resolve_formula',
    'kelvin_to_celsius',
    'kelvin_to_fahrenheit',
    'celsius_to_fahrenheit',
    'divide_by',
    'set_constant',
]
