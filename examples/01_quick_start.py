#!/usr/bin/env python3
"""Quick Start Example

This example shows the most basic usage of pychartcardsqt:
- Building a bar chart card from (label, value) tuples
- Expanding it to fullscreen with the header button
"""

import sys

from PySide6 import QtWidgets

from pychartcardsqt import bar_chart_card


def main():
    """Run the quick start example."""
    app = QtWidgets.QApplication(sys.argv)

    card = bar_chart_card(
        "Threats",
        [("Attack", 4), ("Threat", 3), ("Kidnapping", 2), ("Homicide", 1), ("Other", 0)],
    )
    card.expandedChanged.connect(lambda on: print("expanded" if on else "collapsed"))
    card.resize(420, 260)
    card.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
