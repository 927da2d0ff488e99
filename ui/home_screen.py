"""
Home screen: connection toggle, recognized phrase, speech controls.
"""

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
                               QSlider, QFrame)
from PySide6.QtCore import Qt, Signal

from config import (STATUS_CONNECTED, STATUS_CONNECTING, STATUS_LOST, STATUS_FAILED,
                    SPEECH_SPEED_RANGE)

SCREEN_HISTORY = "history"
SCREEN_SETTINGS = "settings"


class ControlSlider(QWidget):
    """Labelled slider over a float range."""

    value_changed = Signal(float)

    STEPS = 100

    def __init__(self, label, value_range=(0.0, 1.0), parent=None):
        super().__init__(parent)
        self.low, self.high = value_range

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.label = QLabel(label)
        self.label.setMinimumWidth(110)
        layout.addWidget(self.label)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, self.STEPS)
        self.slider.valueChanged.connect(self._on_slider)
        layout.addWidget(self.slider, 1)

    def _on_slider(self, position):
        self.value_changed.emit(self.value())

    def value(self):
        return self.low + (self.high - self.low) * self.slider.value() / self.STEPS

    def set_value(self, value):
        """Move the slider without emitting value_changed."""
        position = round((value - self.low) / (self.high - self.low) * self.STEPS)
        self.slider.blockSignals(True)
        self.slider.setValue(max(0, min(self.STEPS, position)))
        self.slider.blockSignals(False)


class HomeScreen(QWidget):
    """Main screen of the app."""

    navigate = Signal(str)

    def __init__(self, backend, theme_manager, parent=None):
        super().__init__(parent)
        self.backend = backend
        self.theme = theme_manager
        self._init_ui()
        self.update_status(backend.status)
        self.update_phrase(backend.current_phrase)
        self.update_settings(backend.settings)
        self.refresh_theme()

    def _init_ui(self):
        """Initialize UI components."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 40, 24, 40)

        self.title = QLabel("HandSpeak")
        self.title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.title)

        self.connect_btn = QPushButton("⏻  Connect")
        self.connect_btn.setMinimumWidth(180)
        self.connect_btn.clicked.connect(self.backend.toggle_connection)
        layout.addWidget(self.connect_btn, 0, Qt.AlignmentFlag.AlignHCenter)

        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.status_label)

        layout.addSpacing(24)

        # Phrase card
        self.card = QFrame()
        card_layout = QVBoxLayout(self.card)
        mic = QLabel("🎤")
        mic.setAlignment(Qt.AlignmentFlag.AlignCenter)
        mic.setStyleSheet("font-size: 40px; background: transparent;")
        card_layout.addWidget(mic)

        self.phrase_label = QLabel()
        self.phrase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.phrase_label.setWordWrap(True)
        self.phrase_label.setStyleSheet("background: transparent;")
        card_layout.addWidget(self.phrase_label, 1)
        layout.addWidget(self.card, 1)

        layout.addSpacing(24)

        self.repeat_btn = QPushButton("↻")
        self.repeat_btn.setFixedSize(100, 100)
        self.repeat_btn.setToolTip("Repeat phrase")
        self.repeat_btn.clicked.connect(self.backend.repeat_current)
        layout.addWidget(self.repeat_btn, 0, Qt.AlignmentFlag.AlignHCenter)

        layout.addSpacing(16)

        self.volume_slider = ControlSlider("Volume")
        self.volume_slider.value_changed.connect(
            lambda value: self.backend.update_settings(volume=value))
        layout.addWidget(self.volume_slider)

        self.speed_slider = ControlSlider("Speech Speed", SPEECH_SPEED_RANGE)
        self.speed_slider.value_changed.connect(
            lambda value: self.backend.update_settings(speech_speed=value))
        layout.addWidget(self.speed_slider)

        layout.addSpacing(24)

        nav = QHBoxLayout()
        self.history_btn = QPushButton("🕘")
        self.history_btn.setFixedSize(50, 50)
        self.history_btn.setToolTip("History")
        self.history_btn.clicked.connect(lambda: self.navigate.emit(SCREEN_HISTORY))
        nav.addWidget(self.history_btn)
        nav.addStretch()
        self.settings_btn = QPushButton("⚙")
        self.settings_btn.setFixedSize(50, 50)
        self.settings_btn.setToolTip("Settings")
        self.settings_btn.clicked.connect(lambda: self.navigate.emit(SCREEN_SETTINGS))
        nav.addWidget(self.settings_btn)
        layout.addLayout(nav)

    # ========================================================
    #                  UI UPDATE METHODS
    # ========================================================

    def update_status(self, status):
        """Update connect button and status line."""
        connected = status == STATUS_CONNECTED
        if status == STATUS_CONNECTING:
            self.connect_btn.setText("⏻  Connecting...")
            self.connect_btn.setEnabled(False)
        else:
            self.connect_btn.setText("⏻  Disconnect" if connected else "⏻  Connect")
            self.connect_btn.setEnabled(True)

        self.repeat_btn.setEnabled(connected)
        self.status_label.setText(status)
        if status in (STATUS_LOST, STATUS_FAILED):
            self.status_label.setStyleSheet(f"color: {self.theme.get_color('danger')};")
        else:
            self.status_label.setStyleSheet("")
        self._style_connect_button(connected)

    def update_phrase(self, phrase):
        self.phrase_label.setText(phrase)

    def update_settings(self, settings):
        self.volume_slider.set_value(settings.volume)
        self.speed_slider.set_value(settings.speech_speed)

    def _style_connect_button(self, connected):
        self.connect_btn.setStyleSheet(
            self.theme.pill_button_style('danger_light' if connected else 'accent'))

    def refresh_theme(self):
        """Re-apply styles after theme or font change."""
        self.title.setFont(self.theme.title_font())
        self.phrase_label.setFont(self.theme.phrase_font())
        self.card.setStyleSheet(self.theme.card_style())
        self.repeat_btn.setStyleSheet(self.theme.circle_button_style('accent', 100))
        for button in (self.history_btn, self.settings_btn):
            button.setStyleSheet(self.theme.circle_button_style('surface', 50))
        self._style_connect_button(self.backend.is_connected())
