#!/usr/bin/env python3
"""Donut and Pie Styling Example

Demonstrates:
- Explicit slice colors (hex strings, RGB tuples, QColor, color names)
- Palette colors for uncolored points
- Custom DonutChartStyle (thicker ring, wider gaps)
"""

import sys

from PySide6 import QtGui, QtWidgets

from pychartcardsqt import DonutChart, DonutChartStyle, PieChart, PieChartStyle


def main():
    """Run the styling example."""
    app = QtWidgets.QApplication(sys.argv)

    window = QtWidgets.QWidget()
    layout = QtWidgets.QHBoxLayout(window)

    colored = [
        ("Hex", 30, "#ffcb04"),
        ("Tuple", 25, (40, 145, 59)),
        ("QColor", 20, QtGui.QColor(110, 166, 255)),
        ("Name", 25, "crimson"),
    ]
    layout.addWidget(DonutChart(colored, DonutChartStyle(thickness=44, gap_angle=4)))
    layout.addWidget(PieChart([("North", 5), ("South", 3), ("East", 2)], PieChartStyle(palette="Set2")))

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
