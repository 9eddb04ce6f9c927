from elevator_system import ElevatorSystem
from request import SubmitResult
from traffic_generator import RandomCallGenerator


def test_random_requests_go_through_the_facade(make_config):
    system = ElevatorSystem(make_config(floors=6, elevators=2))
    subscription = system.subscribe()
    generator = RandomCallGenerator(system, seed=7)

    results = [generator.submit_random_request() for _ in range(20)]

    assert generator.generated == 20
    assert all(isinstance(r, SubmitResult) for r in results)
    # 校验失败只会是边界楼层的方向错误
    assert {r for r in results if not r.accepted} <= {SubmitResult.REJECTED_INVALID_DIRECTION}
    assert len(subscription.drain()) == 20


def test_generator_thread_stops_promptly(make_config, wait_until):
    system = ElevatorSystem(make_config())
    generator = RandomCallGenerator(system, min_interval=0.01, max_interval=0.02, seed=1)
    generator.start()
    assert wait_until(lambda: generator.generated >= 3)
    generator.stop()
    generator.join(1.0)
    assert not generator.is_alive()
    history = system.event_log.history()
    assert any("自动模式] 开启" in line for line in history)
    assert any("自动模式] 关闭" in line for line in history)
