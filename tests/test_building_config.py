import pytest

from building_config import BuildingConfig, NUM_ELEVATORS, NUM_FLOORS


def test_defaults_are_valid():
    config = BuildingConfig()
    config.validate()
    assert config.floors == NUM_FLOORS
    assert config.elevators == NUM_ELEVATORS
    assert config.inbox_capacity == 32


@pytest.mark.parametrize("overrides", [
    {"floors": 1},
    {"elevators": 0},
    {"inbox_capacity": 0},
    {"tick_interval": 0},
    {"shutdown_timeout": -1},
    {"door_open_time": -0.5},
    {"elevators": 2, "start_floors": (1,)},
    {"floors": 5, "elevators": 1, "start_floors": (6,)},
])
def test_invalid_config_is_rejected(overrides):
    with pytest.raises(ValueError):
        BuildingConfig(**overrides).validate()


def test_default_start_floors_are_staggered_and_clamped():
    config = BuildingConfig(floors=3, elevators=5)
    assert [config.start_floor_for(i) for i in range(5)] == [1, 2, 3, 3, 3]


def test_explicit_start_floors():
    config = BuildingConfig(floors=10, elevators=2, start_floors=(7, 7))
    config.validate()
    assert config.start_floor_for(1) == 7
