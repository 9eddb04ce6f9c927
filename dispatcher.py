# dispatcher.py
import queue
import threading
from typing import Iterable, Optional, Sequence, Tuple

from building_config import BuildingConfig
from elevator import Elevator, ElevatorSnapshot
from event_log import EventLog
from request import Direction, ElevatorStatus, Request, SubmitResult

SAME_DIRECTION_STOP_PENALTY = 2
QUEUE_DEPTH_PENALTY = 10


def calculate_cost(snapshot: ElevatorSnapshot, request: Request) -> int:
    """
    电梯响应外部请求的代价，越小越好（只依赖快照，同样的输入结果相同）：
    - 空闲：纯距离
    - 同向且请求在前方：距离 + 2 × 途中要停的楼层数
    - 其他：先跑完当前方向最远的目标再折返 + 10 × 待停楼层数
    """
    current = snapshot.current_floor
    floor = request.source_floor

    if snapshot.status == ElevatorStatus.IDLE:
        return abs(current - floor)

    if snapshot.direction == request.direction:
        if snapshot.direction == Direction.UP and floor >= current:
            stops = sum(1 for f in snapshot.pending_floors if current < f <= floor)
            return (floor - current) + SAME_DIRECTION_STOP_PENALTY * stops
        if snapshot.direction == Direction.DOWN and floor <= current:
            stops = sum(1 for f in snapshot.pending_floors if floor <= f < current)
            return (current - floor) + SAME_DIRECTION_STOP_PENALTY * stops

    furthest = _furthest_target(snapshot)
    return (abs(current - furthest) + abs(furthest - floor)
            + QUEUE_DEPTH_PENALTY * len(snapshot.pending_floors))


def _furthest_target(snapshot: ElevatorSnapshot) -> int:
    if not snapshot.pending_floors:
        return snapshot.current_floor
    if snapshot.direction == Direction.UP:
        return max(snapshot.pending_floors)
    if snapshot.direction == Direction.DOWN:
        return min(snapshot.pending_floors)
    return snapshot.current_floor


class Dispatcher:
    def __init__(self, elevators: Sequence[Elevator], config: BuildingConfig, event_log: EventLog):
        # 电梯列表构造后不再变化，打分时遍历无需加锁
        self.elevators: Tuple[Elevator, ...] = tuple(elevators)
        self.config = config
        self._log = event_log
        # 外部请求队列（无界，线程安全）
        self.external_requests: "queue.Queue[Request]" = queue.Queue()
        self.running = False
        self._thread: Optional[threading.Thread] = None

    # ========== 提交请求（任意线程调用） ==========
    def submit_external_call(self, floor: int, direction: Direction) -> SubmitResult:
        if not self._is_valid_floor(floor):
            self._log.warning(f"[调度器] 拒绝外部请求：无效楼层 {floor}")
            return SubmitResult.REJECTED_INVALID_FLOOR

        if not self._is_valid_direction(floor, direction):
            self._log.warning(f"[调度器] 拒绝外部请求：{floor} 楼不能选择方向 {direction.value}")
            return SubmitResult.REJECTED_INVALID_DIRECTION

        self.external_requests.put(Request.external(floor, direction))
        self._log.emit(f"[调度器] 添加外部请求：{floor} 楼，方向 {direction.value}")
        return SubmitResult.ACCEPTED

    def submit_internal_request(self, target_floor: int, elevator_id: int) -> SubmitResult:
        if not self._is_valid_floor(target_floor):
            self._log.warning(f"[调度器] 拒绝内部请求：无效楼层 {target_floor}")
            return SubmitResult.REJECTED_INVALID_FLOOR

        if not 0 <= elevator_id < len(self.elevators):
            self._log.warning(f"[调度器] 拒绝内部请求：无效电梯号 {elevator_id}")
            return SubmitResult.REJECTED_INVALID_CAR

        # 内部请求不经过打分，直接送进对应电梯的信箱
        request = Request.internal(target_floor, elevator_id)
        elevator = self.elevators[elevator_id]
        if elevator.enqueue_blocking(request, self.config.assignment_timeout):
            self._log.emit(f"[调度器] 电梯 {elevator_id} 内部请求前往 {target_floor} 楼")
        else:
            self._log.warning(f"[调度器] 电梯 {elevator_id} 信箱已满，丢弃前往 {target_floor} 楼的内部请求")
        return SubmitResult.ACCEPTED

    def _is_valid_floor(self, floor: int) -> bool:
        return 1 <= floor <= self.config.floors

    def _is_valid_direction(self, floor: int, direction: Direction) -> bool:
        if direction == Direction.NONE:
            return False
        if floor == 1 and direction == Direction.DOWN:
            return False
        if floor == self.config.floors and direction == Direction.UP:
            return False
        return True

    # ========== 调度线程 ==========
    def start(self):
        self.running = True
        self._thread = threading.Thread(target=self._dispatch_loop, name="Dispatcher", daemon=True)
        self._thread.start()

    def stop(self):
        self.running = False

    def join(self, timeout: Optional[float] = None) -> bool:
        """等待调度线程退出，返回是否已退出"""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _dispatch_loop(self):
        self._log.emit("[调度器] 已启动")
        while self.running:
            try:
                request = self.external_requests.get(timeout=self.config.dispatch_poll_interval)
            except queue.Empty:
                continue
            self.assign_request(request)
        self._drop_pending_calls()
        self._log.emit("[调度器] 已停止")

    def _drop_pending_calls(self):
        # 停机时队列里还没分配的呼叫直接丢弃，但每条都记日志
        while True:
            try:
                request = self.external_requests.get_nowait()
            except queue.Empty:
                return
            self._log.warning(f"[调度器] 停机，丢弃 {request.source_floor} 楼未分配的呼叫")

    # ========== 分配算法 ==========
    def assign_request(self, request: Request) -> Optional[Elevator]:
        """把一个外部请求分给代价最小的电梯，返回实际接收的电梯，丢弃时返回 None"""
        best = self.find_best_elevator(request)
        if best is None:
            self._log.warning(f"[调度器] 没有可用电梯，丢弃 {request.source_floor} 楼的呼叫")
            return None

        if best.enqueue_blocking(request, self.config.assignment_timeout):
            self._log.emit(f"[调度器] {request.source_floor} 楼的呼叫分配给电梯 {best.elevator_id}")
            return best

        self._log.warning(f"[调度器] 电梯 {best.elevator_id} 信箱已满，改派其他电梯")
        return self._assign_to_next_best(request, best)

    def _assign_to_next_best(self, request: Request, excluded: Elevator) -> Optional[Elevator]:
        # 只再尝试一次，且不再阻塞等待
        candidate = self.find_best_elevator(request, exclude=(excluded,))
        if candidate is not None and candidate.enqueue(request):
            self._log.emit(f"[调度器] {request.source_floor} 楼的呼叫改派给电梯 {candidate.elevator_id}")
            return candidate

        self._log.warning(f"[调度器] 改派失败，丢弃 {request.source_floor} 楼的呼叫")
        return None

    def find_best_elevator(self, request: Request, exclude: Iterable[Elevator] = ()) -> Optional[Elevator]:
        excluded = tuple(exclude)
        best = None
        best_cost = None
        for elevator in self.elevators:
            if elevator in excluded:
                continue
            cost = calculate_cost(elevator.snapshot(), request)
            # 严格小于：代价相同时保留编号更小（先遍历到）的电梯
            if best_cost is None or cost < best_cost:
                best, best_cost = elevator, cost
        return best
