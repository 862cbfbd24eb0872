"""Shared plumbing for the animated chart widgets.

A chart keeps the series object the caller handed in (its identity drives the
animation restart), a coerced tuple of point models for drawing, a frozen
style and a FrameTicker that repaints while the animation runs.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from PySide6 import QtGui
from PySide6.QtCore import QRectF, Signal
from PySide6.QtWidgets import QSizePolicy, QWidget

from .animation import FrameTicker
from .models import Series, coerce_series, magnitudes
from .painting import draw_placeholder

log = logging.getLogger(__name__)


class BaseChart(QWidget):
    """Base class: data binding, animation ticking and placeholder painting.

    Subclasses implement :meth:`_bind_animation`, :meth:`is_animating`,
    :meth:`_paint` and usually :meth:`scaled_style`.

    Attributes:
        dataChanged: Signal emitted after :meth:`set_data`.
    """

    dataChanged = Signal()

    PLACEHOLDER_HEIGHT = 100

    def __init__(self, style: Any, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._style = style
        self._series: Series = ()
        self._points: Tuple[Any, ...] = ()
        self._values: List[float] = []
        self._ticker = FrameTicker(self._on_frame, self.is_animating, parent=self)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)

    # ---------- data ----------
    def _coerce(self, series: Optional[Series]) -> Tuple[Any, ...]:
        return coerce_series(series)

    def set_data(self, series: Optional[Series]) -> None:
        """Replace the data; a new series object restarts the animation.

        Args:
            series: Data points or ``(label, value[, color])`` tuples.

        Raises:
            ValueError: If an item is malformed or has a non-finite value.
        """
        points = self._coerce(series)
        self._series = series if series is not None else ()
        self._points = points
        self._values = magnitudes(points)
        if self._bind_animation(self._series):
            log.debug("%s: new series with %d points", type(self).__name__, len(points))
            self._ticker.kick()
        self.updateGeometry()
        self.update()
        self.dataChanged.emit()

    def series(self) -> Series:
        return self._series

    def points(self) -> Tuple[Any, ...]:
        return self._points

    def values(self) -> List[float]:
        """Non-negative magnitudes of the current points."""
        return list(self._values)

    def is_empty(self) -> bool:
        return len(self._points) == 0

    @property
    def style_config(self) -> Any:
        return self._style

    # ---------- subclass hooks ----------
    def _on_frame(self) -> None:
        self.update()

    def _bind_animation(self, series: Series) -> bool:
        raise NotImplementedError

    def is_animating(self) -> bool:
        raise NotImplementedError

    def _paint(self, painter: QtGui.QPainter, rect: QRectF) -> None:
        raise NotImplementedError

    @staticmethod
    def scaled_style(style: Any, scale: float) -> Any:
        """Copy of ``style`` with its sizes multiplied by ``scale``."""
        return style

    # ---------- painting ----------
    def paintEvent(self, event) -> None:
        painter = QtGui.QPainter(self)
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            rect = QRectF(self.rect())
            if self.is_empty():
                draw_placeholder(painter, rect)
            else:
                self._paint(painter, rect)
        finally:
            painter.end()
