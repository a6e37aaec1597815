"""Fixed-window request rate limiting."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class _Window:
    count: int
    resets_at: datetime


@dataclass
class FixedWindowRateLimiter:
    """Allows ``limit`` hits per key in each window of ``window_seconds``."""

    limit: int
    window_seconds: int
    clock: Callable[[], datetime] = field(default=_utc_now)
    _windows: dict[str, _Window] = field(default_factory=dict, repr=False)

    def hit(self, key: str) -> bool:
        """Record a hit for a key and return whether it is allowed."""
        now = self.clock()
        window = self._windows.get(key)
        if window is None or now >= window.resets_at:
            self._prune(now)
            window = _Window(
                count=0, resets_at=now + timedelta(seconds=self.window_seconds)
            )
            self._windows[key] = window
        window.count += 1
        return window.count <= self.limit

    def retry_after(self, key: str) -> int:
        """Return whole seconds until the key's window resets."""
        window = self._windows.get(key)
        if window is None:
            return 0
        remaining = (window.resets_at - self.clock()).total_seconds()
        return max(0, int(remaining) + 1)

    def _prune(self, now: datetime) -> None:
        expired = [key for key, win in self._windows.items() if now >= win.resets_at]
        for key in expired:
            self._windows.pop(key, None)
