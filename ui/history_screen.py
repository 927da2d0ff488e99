"""
History screen: previously spoken phrases.
"""

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
                               QListWidget, QListWidgetItem, QFrame)
from PySide6.QtCore import Qt, Signal


class HistoryCard(QFrame):
    """One history row with speak and delete buttons."""

    def __init__(self, item, theme_manager, on_speak, on_delete, parent=None):
        super().__init__(parent)
        self.item_id = item.id

        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)

        text_col = QVBoxLayout()
        self.text_label = QLabel(item.text)
        self.text_label.setWordWrap(True)
        self.text_label.setStyleSheet("font-size: 16px; font-weight: 500;")
        text_col.addWidget(self.text_label)
        time_label = QLabel(item.time)
        time_label.setStyleSheet("font-size: 12px; color: gray;")
        text_col.addWidget(time_label)
        layout.addLayout(text_col, 1)

        self.speak_btn = QPushButton("🔊")
        self.speak_btn.setFixedSize(36, 36)
        self.speak_btn.setStyleSheet(theme_manager.circle_button_style('accent', 36))
        self.speak_btn.clicked.connect(lambda: on_speak(self.item_id))
        layout.addWidget(self.speak_btn)

        self.delete_btn = QPushButton("🗑")
        self.delete_btn.setFixedSize(36, 36)
        self.delete_btn.setStyleSheet(theme_manager.circle_button_style('danger', 36))
        self.delete_btn.clicked.connect(lambda: on_delete(self.item_id))
        layout.addWidget(self.delete_btn)

        self.setStyleSheet(f"HistoryCard {{ background-color: {theme_manager.get_color('surface')};"
                           "border-radius: 12px; }")


class HistoryScreen(QWidget):
    """Scrollable list of spoken phrases, newest first."""

    back = Signal()

    def __init__(self, backend, theme_manager, parent=None):
        super().__init__(parent)
        self.backend = backend
        self.theme = theme_manager
        self._init_ui()
        self.refresh()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 40, 24, 40)

        header = QHBoxLayout()
        self.back_btn = QPushButton("←")
        self.back_btn.setFixedSize(40, 40)
        self.back_btn.clicked.connect(self.back.emit)
        header.addWidget(self.back_btn)
        self.title = QLabel("History")
        self.title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.addWidget(self.title, 1)
        header.addSpacing(40)
        layout.addLayout(header)

        layout.addSpacing(24)

        self.list_widget = QListWidget()
        self.list_widget.setSpacing(6)
        layout.addWidget(self.list_widget, 1)

        self.empty_label = QLabel("No phrases yet")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.empty_label)

        layout.addSpacing(24)

        self.clear_btn = QPushButton("🗑  Clear All History")
        self.clear_btn.setMinimumHeight(56)
        self.clear_btn.clicked.connect(self.backend.clear_history)
        layout.addWidget(self.clear_btn)

    def refresh(self):
        """Rebuild the list from the backend history."""
        self.list_widget.clear()
        items = self.backend.history.items()
        for item in items:
            card = HistoryCard(item, self.theme,
                               self.backend.speak_history_item,
                               self.backend.delete_history_item)
            row = QListWidgetItem(self.list_widget)
            row.setSizeHint(card.sizeHint())
            self.list_widget.setItemWidget(row, card)

        self.empty_label.setVisible(not items)
        self.clear_btn.setEnabled(bool(items))
        self.refresh_theme()

    def refresh_theme(self):
        self.title.setFont(self.theme.title_font())
        self.back_btn.setStyleSheet(self.theme.circle_button_style('surface', 40))
        self.list_widget.setStyleSheet(
            f"background-color: {self.theme.get_color('surface_variant')};"
            "border-radius: 24px; padding: 8px;")
        self.clear_btn.setStyleSheet(
            f"background-color: {self.theme.get_color('danger')}; color: white;"
            "border-radius: 12px; font-size: 18px;")
