# elevator_system.py
import time
from typing import List, Optional, Tuple

from building_config import BuildingConfig
from dispatcher import Dispatcher
from elevator import Elevator, ElevatorSnapshot
from event_log import EventLog, LogSubscription
from request import Direction, SubmitResult


class ElevatorSystem:
    """
    整个楼宇的电梯系统：持有调度器和所有电梯，统一启动/停止，
    对界面和测试只暴露提交请求、读取快照、订阅日志这几个接口。
    """

    def __init__(self, config: Optional[BuildingConfig] = None, event_log: Optional[EventLog] = None):
        self.config = config if config is not None else BuildingConfig()
        self.config.validate()
        self.event_log = event_log if event_log is not None else EventLog()
        self._elevators: Tuple[Elevator, ...] = tuple(
            Elevator(i, self.config.start_floor_for(i), self.config, self.event_log)
            for i in range(self.config.elevators)
        )
        self.dispatcher = Dispatcher(self._elevators, self.config, self.event_log)

    @property
    def elevators(self) -> Tuple[Elevator, ...]:
        return self._elevators

    def start(self):
        # 不能重复启动（线程只能 start 一次）
        self.dispatcher.start()
        for elevator in self._elevators:
            elevator.start()
        self.event_log.emit(
            f"[系统] 已启动：{len(self._elevators)} 部电梯，{self.config.floors} 层"
        )

    def stop(self) -> List[int]:
        """停止所有线程，返回在超时内没有退出的电梯编号"""
        self.dispatcher.stop()
        for elevator in self._elevators:
            elevator.stop()

        # 所有线程共用一个截止时间，整体停机时间不超过 shutdown_timeout
        deadline = time.monotonic() + self.config.shutdown_timeout
        unresponsive = []
        for elevator in self._elevators:
            if not elevator.is_alive():
                continue
            elevator.join(max(0.0, deadline - time.monotonic()))
            if elevator.is_alive():
                unresponsive.append(elevator.elevator_id)
                self.event_log.warning(f"[系统] 电梯 {elevator.elevator_id} 未能正常停止")

        if not self.dispatcher.join(max(0.0, deadline - time.monotonic())):
            self.event_log.warning("[系统] 调度器未能正常停止")
        self.event_log.emit("[系统] 已停止")
        return unresponsive

    def submit_external_call(self, floor: int, direction: Direction) -> SubmitResult:
        return self.dispatcher.submit_external_call(floor, direction)

    def submit_internal_request(self, floor: int, elevator_id: int) -> SubmitResult:
        return self.dispatcher.submit_internal_request(floor, elevator_id)

    def snapshot_all(self) -> List[ElevatorSnapshot]:
        return [elevator.snapshot() for elevator in self._elevators]

    def subscribe(self, max_lines: Optional[int] = None) -> LogSubscription:
        return self.event_log.subscribe(max_lines)
