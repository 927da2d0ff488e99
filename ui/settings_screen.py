"""
Settings screen: language, voice, font size, theme and reset.
"""

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
                               QComboBox, QCheckBox, QMessageBox)
from PySide6.QtCore import Qt, Signal

from config import LANGUAGE_OPTIONS, VOICE_TYPE_OPTIONS, FONT_SIZE_OPTIONS


class SettingsScreen(QWidget):
    """Settings form; every change is saved immediately."""

    back = Signal()

    def __init__(self, backend, theme_manager, parent=None):
        super().__init__(parent)
        self.backend = backend
        self.theme = theme_manager
        self.rows = []
        self._init_ui()
        self.update_settings(backend.settings)
        self.refresh_theme()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 40, 24, 40)

        header = QHBoxLayout()
        self.back_btn = QPushButton("←")
        self.back_btn.setFixedSize(40, 40)
        self.back_btn.clicked.connect(self.back.emit)
        header.addWidget(self.back_btn)
        self.title = QLabel("Settings")
        self.title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.addWidget(self.title, 1)
        header.addSpacing(40)
        layout.addLayout(header)

        layout.addSpacing(40)

        self.language_combo = self._add_dropdown(layout, "Language", LANGUAGE_OPTIONS, 'language')
        self.voice_combo = self._add_dropdown(layout, "Voice Type", VOICE_TYPE_OPTIONS, 'voice_type')
        self.font_combo = self._add_dropdown(layout, "Font Size", FONT_SIZE_OPTIONS, 'font_size')

        theme_row = self._make_row("Theme")
        self.theme_switch = QCheckBox("Dark")
        self.theme_switch.toggled.connect(
            lambda checked: self.backend.update_settings(dark_theme=checked))
        theme_row.layout().addWidget(self.theme_switch)
        layout.addWidget(theme_row)

        layout.addStretch()

        self.reset_btn = QPushButton("Reset")
        self.reset_btn.setMinimumHeight(56)
        self.reset_btn.clicked.connect(self.confirm_reset)
        layout.addWidget(self.reset_btn)

    def _make_row(self, label):
        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(16, 8, 16, 8)
        name = QLabel(label)
        name.setStyleSheet("font-weight: bold;")
        row_layout.addWidget(name)
        row_layout.addStretch()
        self.rows.append(row)
        return row

    def _add_dropdown(self, layout, label, options, key):
        row = self._make_row(label)
        combo = QComboBox()
        combo.addItems(options)
        combo.currentTextChanged.connect(
            lambda value: self.backend.update_settings(**{key: value}))
        row.layout().addWidget(combo)
        layout.addWidget(row)
        return combo

    def confirm_reset(self):
        """Ask before reverting all settings to their defaults."""
        reply = QMessageBox.question(
            self, "Reset Settings?",
            "This will revert all settings to their default values.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.backend.reset_settings()
            return True
        return False

    def update_settings(self, settings):
        """Show a Settings snapshot without triggering change handlers."""
        for widget, value in ((self.language_combo, settings.language),
                              (self.voice_combo, settings.voice_type),
                              (self.font_combo, settings.font_size)):
            widget.blockSignals(True)
            widget.setCurrentText(value)
            widget.blockSignals(False)

        self.theme_switch.blockSignals(True)
        self.theme_switch.setChecked(settings.dark_theme)
        self.theme_switch.blockSignals(False)

    def refresh_theme(self):
        self.title.setFont(self.theme.title_font())
        self.back_btn.setStyleSheet(self.theme.circle_button_style('surface', 40))
        for row in self.rows:
            row.setStyleSheet(f"background-color: {self.theme.get_color('surface')};"
                              "border-radius: 12px;")
        self.reset_btn.setStyleSheet(
            f"background-color: {self.theme.get_color('surface')};"
            "border-radius: 12px; font-family: serif; font-size: 16px;")
