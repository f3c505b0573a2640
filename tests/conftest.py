"""Pytest configuration and shared fixtures for rack layout tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from builders import make_rack
from racks.application import LayoutStore
from racks.domain import Airflow, DeviceType, Layout

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "layouts"


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def device_types() -> tuple[DeviceType, ...]:
    """A small catalog covering full/half depth, half-U and several airflows."""
    return (
        DeviceType(
            slug="server-1u",
            u_height=1,
            airflow=Airflow.FRONT_TO_REAR,
            model="1U Server",
        ),
        DeviceType(slug="server-2u", u_height=2, airflow=Airflow.FRONT_TO_REAR),
        DeviceType(slug="patch-panel", u_height=1, is_full_depth=False),
        DeviceType(slug="ups-4u", u_height=4, airflow=Airflow.REAR_TO_FRONT),
        DeviceType(slug="blank-half", u_height=0.5, is_full_depth=False),
    )


@pytest.fixture
def empty_layout(device_types: tuple[DeviceType, ...]) -> Layout:
    return Layout(name="Test", rack=make_rack(), device_types=device_types)


@pytest.fixture
def store(empty_layout: Layout) -> LayoutStore:
    return LayoutStore(empty_layout)

