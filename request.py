# request.py
from dataclasses import dataclass, field
from enum import Enum
import time


class Direction(Enum):  # of elevator / of a hall call
    UP = "UP"
    DOWN = "DOWN"
    NONE = "NONE"  # idled elevator, cab press


class RequestType(Enum):
    """
    参数说明：
    - INTERNAL: 用户在电梯内部按楼层按钮发出的请求
    - EXTERNAL: 用户在楼梯间按上/下按钮发出的请求
    """
    INTERNAL = "INTERNAL"
    EXTERNAL = "EXTERNAL"


class ElevatorStatus(Enum):
    IDLE = "IDLE"
    MOVING = "MOVING"
    DOORS_OPENING = "DOORS_OPENING"
    LOADING = "LOADING"
    DOORS_CLOSING = "DOORS_CLOSING"


class SubmitResult(Enum):
    """提交请求的结果，校验失败不抛异常而是返回对应的拒绝原因"""
    ACCEPTED = "ACCEPTED"
    REJECTED_INVALID_FLOOR = "REJECTED_INVALID_FLOOR"
    REJECTED_INVALID_DIRECTION = "REJECTED_INVALID_DIRECTION"
    REJECTED_INVALID_CAR = "REJECTED_INVALID_CAR"

    @property
    def accepted(self) -> bool:
        return self is SubmitResult.ACCEPTED


@dataclass(frozen=True)
class Request:
    """
    参数说明：
    - request_type: INTERNAL or EXTERNAL
    - source_floor: 呼叫所在楼层，仅 EXTERNAL 有效（INTERNAL 为 -1）
    - target_floor: 要停靠的楼层（EXTERNAL 时等于呼叫楼层）
    - direction: 用户想上/下楼，仅 EXTERNAL 有效
    - elevator_id: 目标电梯，仅 INTERNAL 有效（EXTERNAL 为 -1）
    - timestamp: 请求产生的时间（默认当前时间）
    """

    request_type: RequestType
    source_floor: int
    target_floor: int
    direction: Direction = Direction.NONE
    elevator_id: int = -1
    timestamp: float = field(default_factory=time.time, compare=False)

    @classmethod
    def external(cls, floor: int, direction: Direction) -> "Request":
        return cls(RequestType.EXTERNAL, source_floor=floor, target_floor=floor, direction=direction)

    @classmethod
    def internal(cls, target_floor: int, elevator_id: int) -> "Request":
        return cls(RequestType.INTERNAL, source_floor=-1, target_floor=target_floor,
                   elevator_id=elevator_id)

    @property
    def stop_floor(self) -> int:
        # 外部请求只把电梯叫到呼叫楼层，目的楼层由之后的内部请求给出
        if self.request_type == RequestType.EXTERNAL:
            return self.source_floor
        return self.target_floor

    def __repr__(self):
        if self.request_type == RequestType.EXTERNAL:
            return (f"<Request type=EXTERNAL, floor={self.source_floor}, "
                    f"direction={self.direction.value}, time={self.timestamp:.2f}>")
        return (f"<Request type=INTERNAL, target={self.target_floor}, "
                f"elevator={self.elevator_id}, time={self.timestamp:.2f}>")
