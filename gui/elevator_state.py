# gui/elevator_state.py
import threading
from collections import deque
from typing import List, Optional

from elevator_system import ElevatorSystem
from request import Direction, SubmitResult
from traffic_generator import RandomCallGenerator


class ElevatorStateView:
    """界面使用的状态：只通过 ElevatorSystem 的接口读写，不直接碰电梯内部字段"""

    def __init__(self, system: ElevatorSystem, max_log_lines: int = 200):
        self.system = system
        self._subscription = system.subscribe(max_log_lines)
        self._log_lines = deque(maxlen=max_log_lines)
        self._lock = threading.Lock()
        self.total_requests = 0
        self._generator: Optional[RandomCallGenerator] = None

    def call(self, floor: int, direction: Direction) -> SubmitResult:
        """楼梯间按上/下按钮"""
        result = self.system.submit_external_call(floor, direction)
        self._count()
        return result

    def press(self, elevator_id: int, floor: int) -> SubmitResult:
        """电梯内按楼层按钮"""
        result = self.system.submit_internal_request(floor, elevator_id)
        self._count()
        return result

    def _count(self):
        with self._lock:
            self.total_requests += 1

    def status_rows(self) -> List[list]:
        rows = []
        for snap in self.system.snapshot_all():
            targets = "[" + ", ".join(str(f) for f in snap.pending_floors) + "]"
            rows.append([snap.elevator_id, snap.current_floor, snap.direction.value,
                         snap.status.value, targets])
        return rows

    def log_text(self) -> str:
        with self._lock:
            self._log_lines.extend(self._subscription.drain())
            return "\n".join(self._log_lines)

    def stats_text(self) -> str:
        with self._lock:
            total = self.total_requests
            generator = self._generator
        if generator is not None:
            total += generator.generated
        return f"请求总数：{total}"

    @property
    def random_active(self) -> bool:
        return self._generator is not None

    def toggle_random(self, min_interval: float = 2.0, max_interval: float = 6.0) -> bool:
        """开/关自动模式，返回切换后是否开启"""
        generator = self._generator
        if generator is not None:
            generator.stop()
            generator.join(max_interval)
            with self._lock:
                self._generator = None
                self.total_requests += generator.generated
            return False
        self._generator = RandomCallGenerator(self.system, min_interval, max_interval)
        self._generator.start()
        return True

    def shutdown(self) -> List[int]:
        if self.random_active:
            self.toggle_random()
        self._subscription.close()
        return self.system.stop()
