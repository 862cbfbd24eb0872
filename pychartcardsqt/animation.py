"""Time-based animation progress for the chart widgets.

A chart owns one or more progress animations and reads them on every paint:

  - ProgressAnimation: a single eased 0 -> 1 progress value, restarted from 0
    whenever the bound data object changes identity.
  - StaggeredAnimation: one progress value per item, item i starting
    ``i * stagger_ms`` after the others.
  - ValueTween / ColorTween: move a displayed value from wherever it is now
    to a new target.
  - FrameTicker: a QTimer that repaints while anything is still moving.

Easing uses Qt's QEasingCurve. Progress objects never schedule anything
themselves; they are pure functions of a clock. Every query also takes an
explicit ``now`` in milliseconds:

    anim = ProgressAnimation(duration_ms=800)
    anim.bind(series, now=0)    # -> True, starts at 0
    anim.progress(now=400)      # eased value at the halfway point
    anim.bind(series, now=500)  # -> False, same object
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Any, Callable, Optional

from PySide6 import QtCore
from PySide6.QtCore import QPointF

from .models import RGBA, lerp_rgba
from .utils import clamp

log = logging.getLogger(__name__)

Clock = Callable[[], float]
Easing = QtCore.QEasingCurve


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


def bezier_easing(x1: float, y1: float, x2: float, y2: float) -> QtCore.QEasingCurve:
    """A ``cubic-bezier(x1, y1, x2, y2)`` curve as a Qt easing curve."""
    curve = QtCore.QEasingCurve(QtCore.QEasingCurve.Type.BezierSpline)
    curve.addCubicBezierSegment(QPointF(x1, y1), QPointF(x2, y2), QPointF(1.0, 1.0))
    return curve


FAST_OUT_SLOW_IN = bezier_easing(0.4, 0.0, 0.2, 1.0)
LINEAR = QtCore.QEasingCurve(QtCore.QEasingCurve.Type.Linear)


def ease(curve: Easing, fraction: float) -> float:
    """Eased value of ``curve`` at ``fraction``, clamped to [0, 1]."""
    x = clamp(fraction, 0.0, 1.0)
    if x in (0.0, 1.0):
        return x
    return float(curve.valueForProgress(x))


class AnimationPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    SETTLED = "settled"


def _check_duration(name: str, value: float) -> float:
    v = float(value)
    if v < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return v


_UNBOUND = object()


class ProgressAnimation:
    """Eased progress from 0 to 1 over a fixed duration.

    The animation is keyed on the identity of a bound object (normally the
    data series): binding a different object restarts from 0, binding the same
    object again is a no-op. Equal-but-distinct series therefore restart the
    animation, and an animation interrupted half way starts over from 0.
    """

    def __init__(
        self,
        duration_ms: float = 800,
        easing: Easing = FAST_OUT_SLOW_IN,
        clock: Optional[Clock] = None,
    ) -> None:
        self.duration_ms = _check_duration("duration_ms", duration_ms)
        self.easing = easing
        self._clock = clock or monotonic_ms
        self._start: Optional[float] = None
        self._bound: Any = _UNBOUND

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else float(now)

    def bind(self, key: Any, now: Optional[float] = None) -> bool:
        """Bind ``key``; restart and return True if it is a new object."""
        if key is self._bound and self._start is not None:
            return False
        self._bound = key
        self.restart(now)
        return True

    def restart(self, now: Optional[float] = None) -> None:
        self._start = self._now(now)
        log.debug("Animation restarted (duration=%sms)", self.duration_ms)

    def reset(self) -> None:
        """Back to idle, forgetting the bound key."""
        self._start = None
        self._bound = _UNBOUND

    def elapsed(self, now: Optional[float] = None) -> float:
        if self._start is None:
            return 0.0
        return max(self._now(now) - self._start, 0.0)

    def phase(self, now: Optional[float] = None) -> AnimationPhase:
        if self._start is None:
            return AnimationPhase.IDLE
        if self.elapsed(now) < self.duration_ms:
            return AnimationPhase.RUNNING
        return AnimationPhase.SETTLED

    def is_running(self, now: Optional[float] = None) -> bool:
        return self.phase(now) is AnimationPhase.RUNNING

    def progress(self, now: Optional[float] = None) -> float:
        if self._start is None:
            return 0.0
        if self.duration_ms == 0:
            return 1.0
        return ease(self.easing, self.elapsed(now) / self.duration_ms)


class StaggeredAnimation:
    """Per-item progress where item ``i`` starts ``i * stagger_ms`` late."""

    def __init__(
        self,
        count: int = 0,
        duration_ms: float = 500,
        stagger_ms: float = 50,
        easing: Easing = FAST_OUT_SLOW_IN,
        clock: Optional[Clock] = None,
    ) -> None:
        self.count = max(int(count), 0)
        self.stagger_ms = _check_duration("stagger_ms", stagger_ms)
        self._base = ProgressAnimation(duration_ms, easing, clock)

    @property
    def duration_ms(self) -> float:
        return self._base.duration_ms

    def bind(self, key: Any, count: int, now: Optional[float] = None) -> bool:
        """Bind a new item list; restart every item if ``key`` is a new object."""
        restarted = self._base.bind(key, now)
        if restarted:
            self.count = max(int(count), 0)
        return restarted

    def restart(self, now: Optional[float] = None) -> None:
        self._base.restart(now)

    def progress(self, index: int, now: Optional[float] = None) -> float:
        if self._base.phase(now) is AnimationPhase.IDLE:
            return 0.0
        local = self._base.elapsed(now) - index * self.stagger_ms
        if local <= 0:
            return 0.0
        if self.duration_ms == 0:
            return 1.0
        return ease(self._base.easing, local / self.duration_ms)

    def total_ms(self) -> float:
        return self.duration_ms + max(self.count - 1, 0) * self.stagger_ms

    def phase(self, now: Optional[float] = None) -> AnimationPhase:
        if self._base.phase(now) is AnimationPhase.IDLE:
            return AnimationPhase.IDLE
        if self._base.elapsed(now) < self.total_ms():
            return AnimationPhase.RUNNING
        return AnimationPhase.SETTLED

    def is_running(self, now: Optional[float] = None) -> bool:
        return self.phase(now) is AnimationPhase.RUNNING


class ValueTween:
    """A displayed float that glides to each new target.

    Retargeting starts from the value shown at that instant, so rapid changes
    never jump.
    """

    def __init__(
        self,
        initial: float = 0.0,
        duration_ms: float = 1200,
        easing: Easing = FAST_OUT_SLOW_IN,
        clock: Optional[Clock] = None,
    ) -> None:
        self._anim = ProgressAnimation(duration_ms, easing, clock)
        self._from = initial
        self._to = initial

    @property
    def target(self):
        return self._to

    def _mix(self, start, end, t: float):
        return start + (end - start) * t

    def retarget(self, target, now: Optional[float] = None) -> None:
        if target == self._to:
            return
        self._from = self.value(now)
        self._to = target
        self._anim.restart(now)

    def value(self, now: Optional[float] = None):
        if self._anim.phase(now) is AnimationPhase.IDLE:
            return self._to
        return self._mix(self._from, self._to, self._anim.progress(now))

    def is_running(self, now: Optional[float] = None) -> bool:
        return self._anim.is_running(now)


class ColorTween(ValueTween):
    """RGBA variant of :class:`ValueTween`."""

    def __init__(
        self,
        initial: RGBA,
        duration_ms: float = 1200,
        easing: Easing = FAST_OUT_SLOW_IN,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(initial, duration_ms, easing, clock)

    def _mix(self, start, end, t: float):
        return lerp_rgba(start, end, t)


class FrameTicker(QtCore.QObject):
    """Calls ``on_frame`` every ~16 ms while ``is_running()`` is true.

    Call :meth:`kick` after starting an animation; the timer stops itself
    once a frame sees nothing running.
    """

    def __init__(
        self,
        on_frame: Callable[[], None],
        is_running: Callable[[], bool],
        interval_ms: int = 16,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._on_frame = on_frame
        self._is_running = is_running
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(int(interval_ms))
        self._timer.timeout.connect(self._tick)

    def kick(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _tick(self) -> None:
        self._on_frame()
        if not self._is_running():
            self._timer.stop()
