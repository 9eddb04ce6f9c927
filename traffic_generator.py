# traffic_generator.py
import random
import threading
from typing import Optional

from elevator_system import ElevatorSystem
from request import Direction


class RandomCallGenerator(threading.Thread):
    """
    随机产生乘客请求（自动模式）：
    - 一半概率在随机楼层按上/下按钮
    - 一半概率在随机电梯里按随机楼层
    边界楼层的非法方向照样提交，由调度器校验拒绝。
    """

    def __init__(self, system: ElevatorSystem, min_interval: float = 2.0, max_interval: float = 6.0,
                 seed: Optional[int] = None):
        super().__init__(name="RandomCallGenerator", daemon=True)
        self.system = system
        self.min_interval = min_interval
        self.max_interval = max_interval
        self.generated = 0
        self._random = random.Random(seed)
        self._stop_event = threading.Event()
        self._count_lock = threading.Lock()

    def run(self):
        self.system.event_log.emit("[自动模式] 开启")
        while not self._stop_event.is_set():
            self.submit_random_request()
            delay = self._random.uniform(self.min_interval, self.max_interval)
            if self._stop_event.wait(delay):
                break
        self.system.event_log.emit("[自动模式] 关闭")

    def submit_random_request(self):
        config = self.system.config
        floor = self._random.randint(1, config.floors)
        if self._random.random() < 0.5:
            direction = self._random.choice((Direction.UP, Direction.DOWN))
            result = self.system.submit_external_call(floor, direction)
        else:
            elevator_id = self._random.randrange(config.elevators)
            result = self.system.submit_internal_request(floor, elevator_id)
        with self._count_lock:
            self.generated += 1
        return result

    def stop(self):
        self._stop_event.set()
