"""
Virtual glove window: send gesture codes without hardware.
"""

from PySide6.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QTableWidget,
                               QTableWidgetItem, QPushButton, QLabel, QHeaderView,
                               QGroupBox, QLineEdit)
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont


class VirtualGloveMonitor(QDialog):
    """Gesture table plus a code entry that feeds the virtual glove."""

    def __init__(self, backend, parent=None):
        super().__init__(parent)
        self.backend = backend
        self.setWindowTitle("Virtual Glove")
        self.setMinimumSize(420, 520)
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        header = QLabel("🧤 Virtual Glove (Simulation)")
        header.setFont(QFont("Arial", 14, QFont.Weight.Bold))
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(header)

        # Manual entry
        entry_group = QGroupBox("Send Gesture Code")
        entry_layout = QHBoxLayout(entry_group)
        self.code_edit = QLineEdit()
        self.code_edit.setPlaceholderText("e.g. A")
        self.code_edit.returnPressed.connect(self.send_entered_code)
        entry_layout.addWidget(self.code_edit, 1)
        send_btn = QPushButton("Send")
        send_btn.clicked.connect(self.send_entered_code)
        entry_layout.addWidget(send_btn)
        layout.addWidget(entry_group)

        # Gesture table; double-click sends the code
        table_group = QGroupBox("Gesture Table (double-click to send)")
        table_layout = QVBoxLayout(table_group)
        self.table = QTableWidget()
        self.table.setColumnCount(2)
        self.table.setHorizontalHeaderLabels(["Code", "Phrase"])
        table_header = self.table.horizontalHeader()
        table_header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        table_header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.cellDoubleClicked.connect(self._send_row)
        table_layout.addWidget(self.table)
        layout.addWidget(table_group, 1)

        self.stats_label = QLabel("Codes sent: 0")
        layout.addWidget(self.stats_label)

        hang_up_btn = QPushButton("Simulate Glove Disconnect")
        hang_up_btn.clicked.connect(self.hang_up)
        layout.addWidget(hang_up_btn)

        self._fill_table()

    def _fill_table(self):
        mapping = self.backend.gesture_map.to_dict()
        codes = self.backend.gesture_map.codes()
        self.table.setRowCount(len(codes))
        for row, code in enumerate(codes):
            self.table.setItem(row, 0, QTableWidgetItem(code))
            self.table.setItem(row, 1, QTableWidgetItem(mapping[code]))

    def send_code(self, code):
        """Inject a code into the virtual link."""
        if not code:
            return False
        sent = self.backend.bluetooth.inject(code)
        if sent:
            self._update_stats()
        return sent

    def send_entered_code(self):
        if self.send_code(self.code_edit.text().strip()):
            self.code_edit.clear()

    def _send_row(self, row, column):
        self.send_code(self.table.item(row, 0).text())

    def hang_up(self):
        conn = self.backend.bluetooth.connection
        if self.backend.bluetooth.is_virtual() and conn is not None:
            conn.hang_up()

    def _update_stats(self):
        conn = self.backend.bluetooth.connection
        count = len(conn.get_history()) if conn is not None else 0
        self.stats_label.setText(f"Codes sent: {count}")
