import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QApplication,
    QGridLayout,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from pychartcardsqt import (
    HorizontalBarChart,
    PieChartCard,
    bar_chart_card,
    donut_chart_card,
    line_chart_card,
    pie_chart_card,
)

THREATS = sorted(
    [
        ("Threat", 3.0),
        ("Attack", 4.0),
        ("Kidnapping", 2.0),
        ("Homicide", 1.0),
        ("Extortion", 1.0),
        ("Illegal recruitment", 1.0),
        ("Other", 0.0),
    ],
    key=lambda item: item[1],
    reverse=True,
)

THREATS_COLORED = sorted(
    [
        ("Threat", 2650.0, "#ffcb04"),
        ("Attack", 2421.0, "#28913b"),
        ("Kidnapping", 2342.0, "#6ea6ff"),
        ("Homicide", 2000.0, "#d93025"),
        ("Extortion", 41.0, "#ffa500"),
        ("Illegal recruitment", 190.0, "#8b00ff"),
        ("Other", 232.0, "#00ced1"),
    ],
    key=lambda item: item[1],
    reverse=True,
)

SEX = [
    ("Male", 40.0, "#6750a4"),
    ("Female", 56.0, "#625b71"),
    ("Intersex", 4.0, "#7d5260"),
]

TREND = [
    ("Jan", 30.0),
    ("Jan", 0.0),
    ("Jan", 30.0),
    ("Mar", 60.0),
    ("Mar", 90.0),
    ("Feb", 120.0),
    ("Feb", 143.0),
]

RESIDENCE = [
    ("Urban", 2.0, "#9daaf2"),
    ("Rural", 98.0, "#070047"),
]

DATASETS = {
    "Gender": [
        ("Male", 40.0, "#4285f4"),
        ("Female", 50.0, "#ea4335"),
        ("Other", 10.0, "#fbbc05"),
    ],
    "Sex": [
        ("Biological M", 45.0, "#34a853"),
        ("Biological F", 55.0, "#fbbc05"),
    ],
    "Orientation": [
        ("Heterosexual", 70.0, "#ab47bc"),
        ("Homosexual", 20.0, "#ff7043"),
        ("Bisexual", 10.0, "#26c6da"),
    ],
}


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("pychartcardsqt demo")
        self.resize(1100, 900)

        root = QWidget()
        root.setStyleSheet("background: #f4f4f4;")
        layout = QVBoxLayout(root)

        self.risk_chart = HorizontalBarChart("Risk situation", DATASETS)
        layout.addWidget(self.risk_chart)
        layout.addWidget(HorizontalBarChart("Risk situation", {"Gender": DATASETS["Gender"]}))
        layout.addWidget(PieChartCard("Residence zone", RESIDENCE))

        grid = QGridLayout()
        self.bar_card = bar_chart_card("Threats", THREATS)
        self.line_card = line_chart_card("Trend over time", TREND)
        self.pie_card = pie_chart_card("Sex", SEX)
        self.donut_card = donut_chart_card("Threats by type", THREATS_COLORED)
        grid.addWidget(self.bar_card, 0, 0)
        grid.addWidget(self.line_card, 0, 1)
        grid.addWidget(self.pie_card, 1, 0)
        grid.addWidget(self.donut_card, 1, 1)
        layout.addLayout(grid)

        replay = QPushButton("Replay animations")
        replay.clicked.connect(self._replay)
        layout.addWidget(replay)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(root)
        self.setCentralWidget(scroll)

        # Cycle the tabbed chart so the width/color tweens are visible.
        self._keys = list(DATASETS)
        self._timer = QTimer(self)
        self._timer.setInterval(3000)
        self._timer.timeout.connect(self._next_dataset)
        self._timer.start()

    def _next_dataset(self):
        i = self._keys.index(self.risk_chart.selected_dataset())
        self.risk_chart.select_dataset(self._keys[(i + 1) % len(self._keys)])

    def _replay(self):
        # Fresh list objects restart every animation, even with equal values.
        for card in (self.bar_card, self.line_card, self.pie_card, self.donut_card):
            card.chart().set_data(list(card.chart().series()))


def main():
    app = QApplication(sys.argv)
    w = MainWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
