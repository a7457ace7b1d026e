"""
Shared test fixtures for tessera tests.

Provides the bundled PDK, common layers, and a factory for simple
rectangular blocks used as tiles.
"""

import pytest

import tessera
from tessera.geometry import Layer, Point, Rect
from tessera.layout.group import Group
from tessera.layout.port import CellPort, PortId
from tessera.pdk import Pdk, sky130


@pytest.fixture(autouse=True)
def reset_log_level():
    """Restore the package log level after each test."""
    yield
    tessera.set_log_level('INFO')


@pytest.fixture(scope='session')
def pdk() -> Pdk:
    """The bundled SkyWater 130nm rule table."""
    return sky130()


@pytest.fixture
def met1(pdk) -> Layer:
    return pdk.layer('met1')


@pytest.fixture
def met2(pdk) -> Layer:
    return pdk.layer('met2')


@pytest.fixture
def met3(pdk) -> Layer:
    return pdk.layer('met3')


@pytest.fixture
def li1(pdk) -> Layer:
    return pdk.layer('li1')


@pytest.fixture
def block(met1):
    """Factory for a group holding one met1 rectangle, optionally with a port."""

    def make(w: int, h: int, x: int = 0, y: int = 0, port: str = None) -> Group:
        group = Group(f"block_{w}x{h}")
        rect = Rect(Point(x, y), Point(x + w, y + h))
        group.add_rect(met1, rect)
        if port is not None:
            group.add_port(CellPort.with_shape(PortId(port), met1, rect))
        return group

    return make
