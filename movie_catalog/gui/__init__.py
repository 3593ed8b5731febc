"""
gui — PyQt6 front-end for the movie catalog.

Modules
───────
main_window    — MainWindow: catalog table + actions
record_dialog  — RecordDialog: add / edit form
app            — run_app(store): start the event loop
viewmodels     — pure-Python state containers (no Qt)

Only viewmodels is imported here, so the package can be imported (and its
view models tested) on machines without a working Qt platform plugin.
"""

from movie_catalog.gui import viewmodels

__all__ = ["viewmodels"]
