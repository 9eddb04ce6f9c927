import time

from elevator_system import ElevatorSystem
from request import Direction, ElevatorStatus, SubmitResult


def test_snapshot_all_is_in_fleet_order(make_config):
    system = ElevatorSystem(make_config(elevators=3))
    snapshots = system.snapshot_all()
    assert [s.elevator_id for s in snapshots] == [0, 1, 2]
    assert [s.current_floor for s in snapshots] == [1, 2, 3]
    assert all(s.status == ElevatorStatus.IDLE for s in snapshots)


def test_fleet_of_one_serves_single_call(make_config, running_system, wait_until):
    system = running_system(make_config(floors=20, elevators=1))
    subscription = system.subscribe()
    lines = []

    assert system.submit_external_call(20, Direction.UP) == SubmitResult.REJECTED_INVALID_DIRECTION
    assert system.submit_external_call(10, Direction.UP) == SubmitResult.ACCEPTED

    def served():
        snap = system.snapshot_all()[0]
        return snap.current_floor == 10 and not snap.pending_floors and snap.status == ElevatorStatus.IDLE

    assert wait_until(served, timeout=10.0)

    def doors_closed():
        lines.extend(subscription.drain())
        return any("门已关闭" in line for line in lines)

    assert wait_until(doors_closed)
    for fragment in ("分配给电梯 0", "到达 10 层", "上下客", "关门"):
        assert any(fragment in line for line in lines), fragment


def test_rider_presses_destination_after_boarding(make_config, running_system, wait_until):
    system = running_system(make_config(elevators=2, start_floors=(1, 10)))

    assert system.submit_external_call(4, Direction.UP).accepted
    assert wait_until(lambda: system.snapshot_all()[0].current_floor == 4)
    assert system.submit_internal_request(7, 0).accepted

    def arrived():
        snap = system.snapshot_all()[0]
        return snap.current_floor == 7 and snap.status == ElevatorStatus.IDLE

    assert wait_until(arrived, timeout=10.0)
    assert system.snapshot_all()[1].current_floor == 10


def test_stop_returns_within_shutdown_bound_during_door_cycle(make_config, wait_until):
    config = make_config(door_open_time=5.0, loading_time=5.0, door_close_time=5.0, shutdown_timeout=1.0)
    system = ElevatorSystem(config)
    system.start()
    system.submit_internal_request(1, 0)
    system.submit_internal_request(2, 1)
    assert wait_until(lambda: all(s.status == ElevatorStatus.DOORS_OPENING for s in system.snapshot_all()))

    started = time.monotonic()
    unresponsive = system.stop()
    assert time.monotonic() - started < config.shutdown_timeout + 0.5
    assert unresponsive == []
    assert not any(e.is_alive() for e in system.elevators)
    assert any("已停止" in line for line in system.event_log.history())


def test_submissions_are_validated_before_start(make_config):
    system = ElevatorSystem(make_config(floors=5, elevators=2))
    assert system.submit_external_call(1, Direction.DOWN) == SubmitResult.REJECTED_INVALID_DIRECTION
    assert system.submit_external_call(6, Direction.DOWN) == SubmitResult.REJECTED_INVALID_FLOOR
    assert system.submit_internal_request(3, 2) == SubmitResult.REJECTED_INVALID_CAR
    assert system.submit_internal_request(3, 1) == SubmitResult.ACCEPTED
