"""
Unit Registry for Angular Quantities.

This module provides a centralized unit system using the `pint` library so that
angles entering the system are converted to radians exactly once, at the
boundary. Every downstream formula (azimuth, vertex, envelope, distance)
operates on radians only.

Example Usage
-------------
>>> from common.units import ureg, Q_, angle_to_radians
>>> angle_to_radians(Q_(180, 'degree'))
3.141592653589793
>>> angle_to_radians(0.5, 'radian')
0.5
"""

from typing import Union
import warnings

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

AngleLike = Union[float, pint.Quantity]


def ensure_quantity(value: AngleLike, default_unit: str) -> pint.Quantity:
    """Ensure a value is a pint Quantity, applying default unit if necessary.

    Parameters
    ----------
    value : float or pint.Quantity
        The value to convert.
    default_unit : str
        The unit to apply if value is a bare number.

    Returns
    -------
    pint.Quantity
        The value with units.

    Warnings
    --------
    Issues a warning if a bare number is provided without units and
    without an explicit default.
    """
    if isinstance(value, pint.Quantity):
        return value
    if not default_unit:
        warnings.warn(
            f"Bare number {value} provided without units. "
            f"Assuming radian. Consider using explicit units.",
            UserWarning,
            stacklevel=2
        )
        default_unit = "radian"
    return ureg.Quantity(value, default_unit)


def angle_to_radians(value: AngleLike, unit: str = "radian") -> float:
    """Convert an angle to radians.

    Parameters
    ----------
    value : float or pint.Quantity
        The angle. A Quantity carries its own unit and ``unit`` is ignored.
    unit : str
        Unit of a bare number (e.g. 'degree', 'radian', 'arcminute').

    Returns
    -------
    float
        The angle in radians. Values already in radians are returned
        unchanged, so radian-degree-radian round trips are exact.

    Raises
    ------
    ValueError
        If the unit is not an angle.
    """
    quantity = ensure_quantity(value, unit)
    if quantity.units == ureg.radian:
        return float(quantity.magnitude)
    try:
        return float(quantity.to(ureg.radian).magnitude)
    except pint.DimensionalityError as e:
        raise ValueError(
            f"Expected an angle, got units of {quantity.units}"
        ) from e


def angle_from_radians(value_rad: float, unit: str = "degree") -> float:
    """Convert an angle in radians to ``unit``.

    Parameters
    ----------
    value_rad : float
        The angle in radians.
    unit : str
        Target angular unit.

    Returns
    -------
    float
        The angle expressed in ``unit``.
    """
    target = ureg.Unit(unit)
    if target == ureg.radian:
        return float(value_rad)
    try:
        return float(Q_(value_rad, ureg.radian).to(target).magnitude)
    except pint.DimensionalityError as e:
        raise ValueError(f"Expected an angular unit, got {unit}") from e
