"""Shared pytest fixtures for integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from custom_components.hegel_ip.connection import HegelConnection
from custom_components.hegel_ip.coordinator import (
    HegelCoordinator,
    HegelCoordinatorConfig,
)
from tests.integration.simulator import HegelSimulator, hegel_simulator

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@pytest.fixture
async def simulator_fixture() -> AsyncGenerator[tuple[HegelSimulator, str, int]]:
    """Provide simulator, host, and port for integration tests."""
    async with hegel_simulator() as (simulator, host, port):
        yield (simulator, host, port)


@pytest.fixture
async def connection_fixture(
    simulator_fixture: tuple[HegelSimulator, str, int],
) -> AsyncGenerator[HegelConnection]:
    """Provide a connection to the simulator with automatic cleanup."""
    _simulator, host, port = simulator_fixture
    connection = HegelConnection(host, port, timeout=0.5)
    try:
        yield connection
    finally:
        await connection.disconnect()


@pytest.fixture
async def coordinator_fixture(
    simulator_fixture: tuple[HegelSimulator, str, int],
) -> AsyncGenerator[HegelCoordinator]:
    """Provide a coordinator talking to the simulator."""
    _simulator, host, port = simulator_fixture
    coordinator = HegelCoordinator(
        HegelCoordinatorConfig(host=host, port=port, timeout_ms=500)
    )
    try:
        yield coordinator
    finally:
        await coordinator.disconnect()
