#!/usr/bin/env python3
"""Line Chart Scrolling Example

Demonstrates:
- A line chart with more points than fit in the viewport
- Automatic scroll to the most recent values
- Appending a value every second (each new list restarts the animation)
"""

import random
import sys

from PySide6 import QtCore, QtWidgets

from pychartcardsqt import LineChart, LineChartStyle


def main():
    """Run the scrolling line chart example."""
    app = QtWidgets.QApplication(sys.argv)

    series = [(f"W{i}", random.randint(10, 150)) for i in range(1, 16)]
    chart = LineChart(series, LineChartStyle(smooth_lines=False))
    chart.resize(520, 320)
    chart.show()

    def append_point():
        current = list(chart.series())
        current.append((f"W{len(current) + 1}", random.randint(10, 150)))
        chart.set_data(current)

    timer = QtCore.QTimer()
    timer.timeout.connect(append_point)
    timer.start(1000)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
