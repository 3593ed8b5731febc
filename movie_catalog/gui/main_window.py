"""
MainWindow — top-level window for the movie catalog.

Layout
──────
  ┌────────────────────────────────────────────────────────────┐
  │ Search: [_______________________________________________]  │
  │ ┌────────────────────────────────────────────────────────┐ │
  │ │ Title │ Year │ Director │ Rating │ Runtime │ … │Watched│ │
  │ │ …                                                      │ │
  │ └────────────────────────────────────────────────────────┘ │
  │ [Add Movie] [Edit Movie] [Delete Movie] [Upload CSV]       │
  │ [Calculate Scariness]                                      │
  └────────────────────────────────────────────────────────────┘

The window owns no data: every action goes through the MovieStore handed
in by the entry point, then the table is rebuilt from store.get_all().
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from movie_catalog.catalog.store import MovieStore
from movie_catalog.exceptions import StoreError
from movie_catalog.gui.record_dialog import RecordDialog
from movie_catalog.gui.viewmodels import COLUMNS, CatalogViewModel

__all__ = ["MainWindow"]

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Root window: catalog table plus the add/edit/delete/import actions."""

    def __init__(self, store: MovieStore, parent: QWidget = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Horror Movies Manager")
        self.resize(950, 500)

        self._store = store
        self._vm = CatalogViewModel()

        self._build_ui()
        self.refresh()

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        # Search bar
        search_row = QHBoxLayout()
        search_row.addWidget(QLabel("Search:"))
        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText("Filter by title…")
        self._search_edit.textChanged.connect(self._on_search_changed)
        search_row.addWidget(self._search_edit)
        layout.addLayout(search_row)

        # Catalog table
        self._table = QTableWidget(0, len(COLUMNS))
        self._table.setHorizontalHeaderLabels(COLUMNS)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self._table.horizontalHeader().setStretchLastSection(True)
        self._table.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self._table)

        # Action buttons
        btn_row = QHBoxLayout()
        self._add_btn       = QPushButton("Add Movie")
        self._edit_btn      = QPushButton("Edit Movie")
        self._delete_btn    = QPushButton("Delete Movie")
        self._import_btn    = QPushButton("Upload CSV")
        self._scariness_btn = QPushButton("Calculate Scariness")
        for btn in (self._add_btn, self._edit_btn, self._delete_btn,
                    self._import_btn, self._scariness_btn):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        self._add_btn.clicked.connect(self._on_add)
        self._edit_btn.clicked.connect(self._on_edit)
        self._delete_btn.clicked.connect(self._on_delete)
        self._import_btn.clicked.connect(self._on_import)
        self._scariness_btn.clicked.connect(self._on_scariness)

    # ── Table ──────────────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Reload from the store and redraw the table."""
        self._vm.load(self._store.get_all())
        self._refresh_table()

    def _refresh_table(self) -> None:
        rows = self._vm.visible_rows
        self._table.setRowCount(len(rows))
        for row, (_, rec) in enumerate(rows):
            for col, text in enumerate(CatalogViewModel.cells(rec)):
                self._table.setItem(row, col, QTableWidgetItem(text))
        self._table.clearSelection()
        self._vm.select(None)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_search_changed(self, text: str) -> None:
        self._vm.search_query = text
        self._refresh_table()

    def _on_selection_changed(self) -> None:
        selected = self._table.selectionModel().selectedRows()
        self._vm.select(selected[0].row() if selected else None)

    def _require_selection(self, action: str) -> Optional[int]:
        index = self._vm.selected_index
        if index is None:
            QMessageBox.information(self, "No selection",
                                    f"Please select a movie to {action}.")
        return index

    def _save_failed(self, exc: StoreError) -> None:
        logger.error("Store save failed: %s", exc)
        QMessageBox.warning(self, "Save failed", str(exc))

    def _on_add(self) -> None:
        record = RecordDialog.get_record(parent=self)
        if record is None:
            return
        try:
            self._store.add(record)
        except StoreError as exc:
            self._save_failed(exc)
        self.refresh()

    def _on_edit(self) -> None:
        index = self._require_selection("edit")
        if index is None:
            return
        record = RecordDialog.get_record(parent=self, record=self._vm.records[index])
        if record is None:
            return
        try:
            self._store.replace_at(index, record)
        except StoreError as exc:
            self._save_failed(exc)
        self.refresh()

    def _on_delete(self) -> None:
        index = self._require_selection("delete")
        if index is None:
            return
        answer = QMessageBox.question(
            self, "Confirm Delete", "Are you sure you want to delete this movie?"
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        try:
            self._store.remove_at(index)
        except StoreError as exc:
            self._save_failed(exc)
        self.refresh()

    def _on_import(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Upload CSV", "", "CSV files (*.csv);;All files (*)"
        )
        if not path:
            return
        try:
            report = self._store.import_file(path)
        except StoreError as exc:
            self._save_failed(exc)
            self.refresh()
            return
        self.refresh()
        details = "\n".join(str(err) for err in report.errors)
        box = QMessageBox(self)
        box.setWindowTitle("Upload finished")
        box.setText(f"Upload finished. {report.summary()}")
        if details:
            box.setDetailedText(details)
        box.exec()

    def _on_scariness(self) -> None:
        index = self._require_selection("calculate scariness")
        if index is None:
            return
        rec = self._vm.records[index]
        QMessageBox.information(
            self,
            "Movie Scariness",
            f"{rec.pretty()}\nScariness Score: {rec.scariness:.1f} / 10.0",
        )
