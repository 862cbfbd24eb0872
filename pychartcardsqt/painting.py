"""QPainter helpers that turn geometry primitives into Qt drawing calls."""

from __future__ import annotations

from typing import Optional

from PySide6 import QtCore, QtGui
from PySide6.QtCore import QPointF, QRectF, Qt

from .geometry import Path
from .models import Arc, Color, to_rgba

NO_DATA_TEXT = "No data to display"


def qcolor(color: Color) -> QtGui.QColor:
    r, g, b, a = to_rgba(color)
    return QtGui.QColor(r, g, b, a)


def to_qpainter_path(path: Optional[Path]) -> QtGui.QPainterPath:
    """Convert a geometry Path into a QPainterPath (empty for None)."""
    qpath = QtGui.QPainterPath()
    if path is None:
        return qpath
    for cmd in path.commands:
        c = cmd.coords
        if cmd.op == "move":
            qpath.moveTo(c[0], c[1])
        elif cmd.op == "line":
            qpath.lineTo(c[0], c[1])
        elif cmd.op == "cubic":
            qpath.cubicTo(c[0], c[1], c[2], c[3], c[4], c[5])
        elif cmd.op == "close":
            qpath.closeSubpath()
        else:
            raise ValueError(f"Unknown path command: {cmd.op!r}")
    return qpath


def qt_arc_angles(arc: Arc) -> tuple[int, int]:
    """Clockwise degrees -> Qt's counter-clockwise 1/16th degree units."""
    return int(round(-arc.start_angle * 16)), int(round(-arc.sweep_angle * 16))


def square_rect(rect: QRectF, inset: float = 0.0) -> QRectF:
    """Largest square centered in ``rect``, shrunk by ``inset`` on every side."""
    side = max(min(rect.width(), rect.height()) - 2 * inset, 0.0)
    center = rect.center()
    return QRectF(center.x() - side / 2, center.y() - side / 2, side, side)


def draw_placeholder(painter: QtGui.QPainter, rect: QRectF, text: str = NO_DATA_TEXT) -> None:
    painter.save()
    painter.setPen(QtGui.QColor(Qt.gray))
    painter.drawText(rect, Qt.AlignCenter, text)
    painter.restore()


def draw_marker(painter: QtGui.QPainter, center: QPointF, radius: float, color: Color) -> None:
    """Ring-and-dot legend marker."""
    painter.save()
    c = qcolor(color)
    painter.setBrush(Qt.NoBrush)
    painter.setPen(QtGui.QPen(c, max(radius / 4.0, 1.0)))
    painter.drawEllipse(center, radius, radius)
    painter.setPen(Qt.NoPen)
    painter.setBrush(c)
    painter.drawEllipse(center, radius / 2.0, radius / 2.0)
    painter.restore()


def elided(painter: QtGui.QPainter, text: str, width: float) -> str:
    metrics = painter.fontMetrics()
    return metrics.elidedText(text, Qt.ElideRight, max(int(width), 0))


def font_with(base: QtGui.QFont, point_size: float, bold: bool = False) -> QtGui.QFont:
    font = QtGui.QFont(base)
    font.setPointSizeF(float(point_size))
    font.setBold(bold)
    return font


def text_rect(x: float, y: float, width: float, height: float) -> QRectF:
    return QRectF(x, y, max(width, 0.0), max(height, 0.0))


def size_hint(width: float, height: float) -> QtCore.QSize:
    return QtCore.QSize(int(round(width)), int(round(height)))
