"""
滑动窗口限流器
"""
import time
from typing import Callable, List, Optional


class RateLimiter:
    """
    窗口内最多 max_requests 次请求

    Args:
        max_requests: 窗口内允许的请求数
        window_seconds: 窗口长度（秒）
        clock: 时间源，默认 time.monotonic（测试可注入）
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._requests: List[float] = []

    def _cleanup(self) -> None:
        cutoff = self._clock() - self.window_seconds
        self._requests = [t for t in self._requests if t > cutoff]

    def can_make_request(self) -> bool:
        self._cleanup()
        return len(self._requests) < self.max_requests

    def record_request(self) -> None:
        self._requests.append(self._clock())

    def remaining(self) -> int:
        self._cleanup()
        return max(0, self.max_requests - len(self._requests))

    def get_wait_time(self) -> float:
        """距离下次允许请求的秒数（现在即可请求时为 0）"""
        if self.can_make_request():
            return 0.0
        if not self._requests:
            return float(self.window_seconds)
        return max(0.0, self._requests[0] + self.window_seconds - self._clock())

    def reset(self) -> None:
        self._requests = []
