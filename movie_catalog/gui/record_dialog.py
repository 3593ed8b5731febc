"""
RecordDialog — modal add / edit form.

Layout
──────
  ┌──────────────────────────────────┐
  │ Title:            [____________] │
  │ Year:             [____________] │
  │ Director:         [____________] │
  │ Rating (0.0-10.0):[____________] │
  │ Runtime minutes:  [____________] │
  │ Votes:            [____________] │
  │ Watched:          ☐              │
  │ <error label>                    │
  │                  [OK] [Cancel]   │
  └──────────────────────────────────┘

OK collects every field into RecordFormViewModel and validates them as a
unit; the dialog only closes once a complete MovieRecord exists.
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)

from movie_catalog.catalog.models import MovieRecord
from movie_catalog.exceptions import ValidationError
from movie_catalog.gui.viewmodels import RecordFormViewModel

__all__ = ["RecordDialog"]

logger = logging.getLogger(__name__)


class RecordDialog(QDialog):
    """Form dialog that yields a validated MovieRecord or nothing."""

    def __init__(self, record: Optional[MovieRecord] = None,
                 parent: QWidget = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Add Movie" if record is None else "Edit Movie")
        self.setModal(True)
        self._vm = RecordFormViewModel.from_record(record)
        self.result_record: Optional[MovieRecord] = None
        self._build_ui()

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self._title_edit    = QLineEdit(self._vm.title)
        self._year_edit     = QLineEdit(self._vm.year)
        self._director_edit = QLineEdit(self._vm.director)
        self._rating_edit   = QLineEdit(self._vm.rating)
        self._runtime_edit  = QLineEdit(self._vm.runtime)
        self._votes_edit    = QLineEdit(self._vm.votes)
        self._watched_check = QCheckBox()
        self._watched_check.setChecked(self._vm.watched)

        form.addRow("Title:", self._title_edit)
        form.addRow("Year:", self._year_edit)
        form.addRow("Director:", self._director_edit)
        form.addRow("Rating (0.0-10.0):", self._rating_edit)
        form.addRow("Runtime minutes:", self._runtime_edit)
        form.addRow("Votes:", self._votes_edit)
        form.addRow("Watched:", self._watched_check)
        layout.addLayout(form)

        self._error_label = QLabel("")
        self._error_label.setStyleSheet("color: #c62828;")
        layout.addWidget(self._error_label)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_confirm)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _collect(self) -> None:
        self._vm.title    = self._title_edit.text()
        self._vm.year     = self._year_edit.text()
        self._vm.director = self._director_edit.text()
        self._vm.rating   = self._rating_edit.text()
        self._vm.runtime  = self._runtime_edit.text()
        self._vm.votes    = self._votes_edit.text()
        self._vm.watched  = self._watched_check.isChecked()

    def _on_confirm(self) -> None:
        self._collect()
        try:
            self.result_record = self._vm.build()
        except ValidationError:
            self._error_label.setText(self._vm.error_message)
            return
        self.accept()

    # ── Public API ─────────────────────────────────────────────────────────

    @classmethod
    def get_record(cls, parent: QWidget = None,
                   record: Optional[MovieRecord] = None) -> Optional[MovieRecord]:
        """Run the dialog modally; return the new record or None if cancelled."""
        dialog = cls(record=record, parent=parent)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            return dialog.result_record
        return None
