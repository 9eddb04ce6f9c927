# building_config.py
from dataclasses import dataclass
from typing import Optional, Tuple

NUM_ELEVATORS = 5
NUM_FLOORS = 20


@dataclass(frozen=True)
class BuildingConfig:
    """
    参数说明：
    - floors: 楼层总数（>= 2，楼层编号 1..floors）
    - elevators: 电梯数量（>= 1，电梯编号 0..elevators-1）
    - tick_interval: 电梯每走一层的间隔（秒）
    - inbox_poll_interval: 电梯等待新请求的最长时间
    - door_open_time / loading_time / door_close_time: 开门、上下客、关门耗时
    - dispatch_poll_interval: 调度器轮询外部请求队列的最长等待
    - inbox_capacity: 每部电梯请求信箱的容量
    - assignment_timeout: 调度器向电梯投递请求的最长等待
    - shutdown_timeout: 停机时等待每部电梯线程退出的时间
    - start_floors: 每部电梯的初始楼层，None 表示第 i 部停在 i+1 层
    """

    floors: int = NUM_FLOORS
    elevators: int = NUM_ELEVATORS
    tick_interval: float = 0.5
    inbox_poll_interval: float = 0.1
    door_open_time: float = 1.0
    loading_time: float = 1.5
    door_close_time: float = 1.0
    dispatch_poll_interval: float = 0.2
    inbox_capacity: int = 32
    assignment_timeout: float = 0.1
    shutdown_timeout: float = 2.0
    start_floors: Optional[Tuple[int, ...]] = None

    def validate(self) -> None:
        if self.floors < 2:
            raise ValueError(f"floors must be >= 2, got {self.floors}")
        if self.elevators < 1:
            raise ValueError(f"elevators must be >= 1, got {self.elevators}")
        if self.inbox_capacity < 1:
            raise ValueError(f"inbox_capacity must be >= 1, got {self.inbox_capacity}")

        timings = {
            "tick_interval": self.tick_interval,
            "inbox_poll_interval": self.inbox_poll_interval,
            "dispatch_poll_interval": self.dispatch_poll_interval,
            "assignment_timeout": self.assignment_timeout,
            "shutdown_timeout": self.shutdown_timeout,
        }
        for name, value in timings.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        # 门的动作允许为 0（瞬间完成）
        for name in ("door_open_time", "loading_time", "door_close_time"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

        if self.start_floors is not None:
            if len(self.start_floors) != self.elevators:
                raise ValueError(
                    f"start_floors has {len(self.start_floors)} entries, expected {self.elevators}"
                )
            for floor in self.start_floors:
                if not 1 <= floor <= self.floors:
                    raise ValueError(f"start floor {floor} outside 1..{self.floors}")

    def start_floor_for(self, elevator_id: int) -> int:
        if self.start_floors is not None:
            return self.start_floors[elevator_id]
        return min(elevator_id + 1, self.floors)
