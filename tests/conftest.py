"""Shared fixtures: one strategy bundle per coordinate system."""

from __future__ import annotations

import pytest

from geospatial.coordinate_models import CoordinateSystem
from geospatial.strategies import StrategyConfig, make_strategies


@pytest.fixture(scope="module")
def spherical():
    return make_strategies(StrategyConfig(CoordinateSystem.SPHERICAL_EQUATORIAL))


@pytest.fixture(scope="module")
def geographic():
    return make_strategies(StrategyConfig(CoordinateSystem.GEOGRAPHIC))
