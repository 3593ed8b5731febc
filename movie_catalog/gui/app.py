"""
Desktop entry point — builds the QApplication around an existing store.

The MovieStore is created by the caller (cli.main) and passed in; the
window never opens a catalog file on its own.
"""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from movie_catalog.catalog.store import MovieStore
from movie_catalog.gui.main_window import MainWindow

__all__ = ["run_app"]

logger = logging.getLogger(__name__)


def run_app(store: MovieStore) -> int:
    """Show the main window for *store* and run the Qt event loop."""
    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(store)
    window.show()
    logger.info("Catalog window opened for %s", store.path)
    return app.exec()
