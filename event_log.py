# event_log.py
import logging
import threading
import time
from collections import deque
from typing import Iterator, List, Optional

logger = logging.getLogger("elevator_sim")


def configure_logging(log_file: Optional[str] = "elevator_log.txt", level: int = logging.INFO) -> None:
    """控制台 + 日志文件（与界面上的日志栏同一份内容）"""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(threadName)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


class LogSubscription:
    """订阅者一侧的日志流，惰性消费；最多缓存 max_lines 行，满了丢弃最旧的"""

    def __init__(self, event_log: "EventLog", max_lines: int):
        self._event_log = event_log
        self._lines = deque(maxlen=max_lines)
        self._cond = threading.Condition()
        self.dropped = 0
        self.closed = False

    def _push(self, line: str) -> None:
        with self._cond:
            if len(self._lines) == self._lines.maxlen:
                self.dropped += 1
            self._lines.append(line)
            self._cond.notify()

    def pending(self) -> int:
        with self._cond:
            return len(self._lines)

    def get(self, timeout: Optional[float] = None) -> Optional[str]:
        with self._cond:
            if not self._lines:
                self._cond.wait(timeout)
            if self._lines:
                return self._lines.popleft()
            return None

    def drain(self) -> List[str]:
        with self._cond:
            lines = list(self._lines)
            self._lines.clear()
            return lines

    def __iter__(self) -> Iterator[str]:
        # 阻塞迭代，取消订阅后把剩余的行读完再结束
        while not self.closed or self.pending() > 0:
            line = self.get(timeout=0.1)
            if line is not None:
                yield line

    def close(self) -> None:
        self._event_log.unsubscribe(self)
        self.closed = True


class EventLog:
    """
    系统内所有状态变化的日志行：
    - 写入标准 logging（控制台 / elevator_log.txt）
    - 保存最近 history 行
    - 推送给所有订阅者（界面、测试）
    没有订阅者时照常记录。
    """

    def __init__(self, history: int = 500):
        self._lock = threading.Lock()
        self._subscribers: List[LogSubscription] = []
        self._history = deque(maxlen=history)

    def emit(self, message: str, level: int = logging.INFO) -> None:
        logger.log(level, message)
        line = f"[{time.strftime('%H:%M:%S')}] {message}"
        with self._lock:
            self._history.append(line)
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            subscription._push(line)

    def warning(self, message: str) -> None:
        self.emit(message, logging.WARNING)

    def subscribe(self, max_lines: Optional[int] = None) -> LogSubscription:
        # 默认与历史记录同样大小
        subscription = LogSubscription(self, max_lines or self._history.maxlen)
        with self._lock:
            self._subscribers.append(subscription)
        return subscription

    def unsubscribe(self, subscription: LogSubscription) -> None:
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)

    def history(self) -> List[str]:
        with self._lock:
            return list(self._history)
