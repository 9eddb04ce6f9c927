#elevator.py
import queue
import threading
from dataclasses import dataclass
from typing import Iterable, Tuple

from building_config import BuildingConfig
from event_log import EventLog
from request import Direction, ElevatorStatus, Request, RequestType


@dataclass(frozen=True)
class ElevatorSnapshot:
    """某一时刻电梯状态的一致快照，调度器打分和界面显示都只读这个"""

    elevator_id: int
    current_floor: int
    direction: Direction
    status: ElevatorStatus
    pending_floors: Tuple[int, ...]


def next_target(current_floor: int, direction: Direction, pending_floors: Iterable[int]) -> int:
    """
    同向优先（SCAN）选下一个目标楼层：
    - 上行：>= 当前楼层的最低请求，没有则取最高请求（掉头）
    - 下行：<= 当前楼层的最高请求，没有则取最低请求
    - 无方向：取距离最近的请求，距离相同取低楼层
    """
    floors = sorted(pending_floors)
    if not floors:
        return current_floor

    if direction == Direction.UP:
        ups = [f for f in floors if f >= current_floor]
        return ups[0] if ups else floors[-1]

    if direction == Direction.DOWN:
        downs = [f for f in floors if f <= current_floor]
        return downs[-1] if downs else floors[0]

    # floors 升序，min 取第一个最小值，所以平局时选低楼层
    return min(floors, key=lambda f: abs(f - current_floor))


class Elevator(threading.Thread):
    def __init__(self, elevator_id: int, start_floor: int, config: BuildingConfig, event_log: EventLog):
        """
        参数说明：
        - elevator_id: 电梯号（从 0 开始）
        - current_floor: 电梯当前所在楼层
        - direction: 电梯运行方向
        - status: 电梯状态（空闲 / 运行 / 开门 / 上下客 / 关门）
        - pending_floors: 待停靠楼层集合，只由本电梯线程修改
        - inbox: 有界的请求信箱，调度器往里投递请求
        """
        super().__init__(name=f"Elevator-{elevator_id}", daemon=True)
        self.elevator_id = elevator_id
        self.config = config
        self.current_floor = start_floor
        self.direction = Direction.NONE
        self.status = ElevatorStatus.IDLE
        self.pending_floors = set()
        self._lock = threading.Lock()
        self._inbox: "queue.Queue[Request]" = queue.Queue(maxsize=config.inbox_capacity)
        self._stop_event = threading.Event()
        self._log = event_log

    # ========== 对外接口（其他线程调用） ==========
    def enqueue(self, request: Request) -> bool:
        """非阻塞投递，信箱满返回 False，调用方应换一部电梯"""
        try:
            self._inbox.put_nowait(request)
        except queue.Full:
            return False
        return True

    def enqueue_blocking(self, request: Request, timeout: float) -> bool:
        """最多等待 timeout 秒的投递，超时返回 False"""
        try:
            self._inbox.put(request, timeout=timeout)
        except queue.Full:
            return False
        return True

    def snapshot(self) -> ElevatorSnapshot:
        with self._lock:
            return ElevatorSnapshot(
                elevator_id=self.elevator_id,
                current_floor=self.current_floor,
                direction=self.direction,
                status=self.status,
                pending_floors=tuple(sorted(self.pending_floors)),
            )

    def stop(self):
        self._stop_event.set()

    # ========== 电梯线程 ==========
    def run(self):
        self._log.emit(f"[电梯 {self.elevator_id}] 启动于 {self.current_floor} 层")
        while not self._stop_event.is_set():
            self.process_requests()
            self.move()
            self.check_arrival()
            self._stop_event.wait(self.config.tick_interval)
        self._log.emit(f"[电梯 {self.elevator_id}] 已停止运行")

    def process_requests(self):
        try:
            request = self._inbox.get(timeout=self.config.inbox_poll_interval)
        except queue.Empty:
            return

        floor = request.stop_floor
        with self._lock:
            self.pending_floors.add(floor)
        if request.request_type == RequestType.EXTERNAL:
            self._log.emit(f"[电梯 {self.elevator_id}] 接到 {floor} 层的外部呼叫")
        else:
            self._log.emit(f"[电梯 {self.elevator_id}] 内部请求前往 {floor} 层")

    def move(self):
        moved = False
        with self._lock:
            if not self.pending_floors:
                self.status = ElevatorStatus.IDLE
                self.direction = Direction.NONE
                return

            if self.status in (ElevatorStatus.IDLE, ElevatorStatus.MOVING):
                target_floor = next_target(self.current_floor, self.direction, self.pending_floors)
                if target_floor > self.current_floor:
                    self.direction = Direction.UP
                    self.current_floor += 1
                    moved = True
                elif target_floor < self.current_floor:
                    self.direction = Direction.DOWN
                    self.current_floor -= 1
                    moved = True
                if moved:
                    self.status = ElevatorStatus.MOVING
            floor, direction = self.current_floor, self.direction

        if moved:
            self._log.emit(f"[电梯 {self.elevator_id}] {direction.value} 正在移动至第 {floor} 层")

    def check_arrival(self):
        with self._lock:
            if self.current_floor not in self.pending_floors:
                return
            self.pending_floors.discard(self.current_floor)
            self.status = ElevatorStatus.DOORS_OPENING
            floor = self.current_floor

        self._log.emit(f"[电梯 {self.elevator_id}] 到达 {floor} 层，开门")
        self.run_door_cycle()

    def run_door_cycle(self):
        # 所有等待都在锁外进行；停机信号会打断等待并放弃剩余的门动作
        steps = (
            (self.config.door_open_time, ElevatorStatus.LOADING, "上下客"),
            (self.config.loading_time, ElevatorStatus.DOORS_CLOSING, "关门"),
        )
        for wait_time, next_status, label in steps:
            if self._stop_event.wait(wait_time):
                return
            self._set_status(next_status)
            self._log.emit(f"[电梯 {self.elevator_id}] {label}")

        if self._stop_event.wait(self.config.door_close_time):
            return
        with self._lock:
            if self.pending_floors:
                self.status = ElevatorStatus.MOVING
            else:
                self.status = ElevatorStatus.IDLE
                self.direction = Direction.NONE
            status = self.status
        self._log.emit(f"[电梯 {self.elevator_id}] 门已关闭，状态 {status.value}")

    def _set_status(self, status: ElevatorStatus):
        with self._lock:
            self.status = status
