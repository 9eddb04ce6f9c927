import time

import pytest

from building_config import BuildingConfig
from elevator_system import ElevatorSystem


def fast_config(**overrides) -> BuildingConfig:
    params = dict(
        floors=10,
        elevators=2,
        tick_interval=0.02,
        inbox_poll_interval=0.01,
        door_open_time=0.05,
        loading_time=0.05,
        door_close_time=0.05,
        dispatch_poll_interval=0.02,
        assignment_timeout=0.05,
        shutdown_timeout=1.0,
    )
    params.update(overrides)
    return BuildingConfig(**params)


@pytest.fixture
def make_config():
    return fast_config


@pytest.fixture
def wait_until():
    def _wait(predicate, timeout=5.0, interval=0.005):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(interval)
        return predicate()
    return _wait


@pytest.fixture
def running_system():
    systems = []

    def _start(config):
        system = ElevatorSystem(config)
        system.start()
        systems.append(system)
        return system

    yield _start
    for system in systems:
        system.stop()
