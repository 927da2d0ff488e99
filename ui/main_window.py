"""
Main UI window for HandSpeak.
"""

from PySide6.QtWidgets import (QMainWindow, QStackedWidget, QTextEdit, QDockWidget,
                               QMessageBox, QApplication)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QAction, QTextCursor

from config import (WINDOW_TITLE, WINDOW_WIDTH, WINDOW_HEIGHT, MAX_LOG_LINES, CONNECTION_VIRTUAL,
                    STATUS_CONNECTING)
from .home_screen import HomeScreen, SCREEN_HISTORY, SCREEN_SETTINGS
from .history_screen import HistoryScreen
from .settings_screen import SettingsScreen
from .theme_manager import ThemeManager
from .connection_dialog import ConnectionDialog
from .virtual_glove_monitor import VirtualGloveMonitor
from utils.logger import format_log_html


class HandSpeakWindow(QMainWindow):
    """Main window holding the Home, History and Settings screens."""

    def __init__(self, backend, theme_manager=None):
        super().__init__()
        self.backend = backend
        self.signals = backend.signals
        self.theme = theme_manager or ThemeManager()
        self.theme.setup(QApplication.instance())
        self.theme.apply(QApplication.instance(), backend.settings)

        self.init_ui()

        # Connect signals
        self.signals.log_signal.connect(self.add_log)
        self.signals.status_signal.connect(self.update_status)
        self.signals.data_signal.connect(self.on_gesture_data)
        self.signals.connection_lost_signal.connect(self.on_connection_lost)
        self.signals.phrase_signal.connect(self.home.update_phrase)
        self.signals.history_signal.connect(self.history_screen.refresh)
        self.signals.settings_signal.connect(self.apply_settings)

        self.add_log("UI initialized", "success")

    def init_ui(self):
        """Initialize UI components."""
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)

        self._create_menu_bar()

        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)

        self.home = HomeScreen(self.backend, self.theme)
        self.home.navigate.connect(self.show_screen)
        self.stack.addWidget(self.home)

        self.history_screen = HistoryScreen(self.backend, self.theme)
        self.history_screen.back.connect(self.show_home)
        self.stack.addWidget(self.history_screen)

        self.settings_screen = SettingsScreen(self.backend, self.theme)
        self.settings_screen.back.connect(self.show_home)
        self.stack.addWidget(self.settings_screen)

        self._create_log_dock()

    def _create_log_dock(self):
        """Create activity log panel (hidden by default)."""
        self.log_display = QTextEdit()
        self.log_display.setReadOnly(True)

        self.log_dock = QDockWidget("Activity Log", self)
        self.log_dock.setWidget(self.log_display)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self.log_dock)
        self.log_dock.hide()

    def _create_menu_bar(self):
        menubar = self.menuBar()

        connection_menu = menubar.addMenu("Connection")
        options_action = QAction("Connection Options...", self)
        options_action.triggered.connect(self._open_connection_dialog)
        connection_menu.addAction(options_action)
        toggle_action = QAction("Connect / Disconnect", self)
        toggle_action.triggered.connect(self.backend.toggle_connection)
        connection_menu.addAction(toggle_action)

        tools_menu = menubar.addMenu("Tools")
        self.monitor_action = QAction("🧤 Virtual Glove", self)
        self.monitor_action.triggered.connect(self._open_virtual_monitor)
        tools_menu.addAction(self.monitor_action)

        view_menu = menubar.addMenu("View")
        log_action = QAction("Activity Log", self)
        log_action.triggered.connect(lambda: self.log_dock.setVisible(not self.log_dock.isVisible()))
        view_menu.addAction(log_action)

        help_menu = menubar.addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    # ========================================================
    #                  NAVIGATION
    # ========================================================

    @Slot(str)
    def show_screen(self, name):
        if name == SCREEN_HISTORY:
            self.history_screen.refresh()
            self.stack.setCurrentWidget(self.history_screen)
        elif name == SCREEN_SETTINGS:
            self.stack.setCurrentWidget(self.settings_screen)
        else:
            self.show_home()

    @Slot()
    def show_home(self):
        self.stack.setCurrentWidget(self.home)

    def keyPressEvent(self, event):
        """Escape goes back to the home screen."""
        if event.key() == Qt.Key.Key_Escape and self.stack.currentWidget() is not self.home:
            self.show_home()
            return
        super().keyPressEvent(event)

    # ========================================================
    #                  UI UPDATE METHODS
    # ========================================================

    @Slot(str, str)
    def add_log(self, message, level="info"):
        """Add log message with color coding."""
        self.log_display.append(format_log_html(message, level))

        # Keep the log bounded
        document = self.log_display.document()
        excess = document.blockCount() - MAX_LOG_LINES
        if excess > 0:
            cursor = QTextCursor(document)
            cursor.movePosition(QTextCursor.MoveOperation.Start)
            cursor.movePosition(QTextCursor.MoveOperation.NextBlock,
                                QTextCursor.MoveMode.KeepAnchor, excess)
            cursor.removeSelectedText()

        self.log_display.ensureCursorVisible()
        if level in ("error", "warning", "success"):
            self.statusBar().showMessage(message, 4000)

    @Slot(str)
    def update_status(self, status):
        self.home.update_status(status)
        self.monitor_action.setEnabled(status != STATUS_CONNECTING)

    @Slot(str)
    def on_gesture_data(self, raw):
        """Gesture text from the reader thread, handled on the UI thread."""
        self.backend.process_gesture_data(raw)

    @Slot()
    def on_connection_lost(self):
        self.backend.handle_connection_lost()

    @Slot(object)
    def apply_settings(self, settings):
        self.home.update_settings(settings)
        self.settings_screen.update_settings(settings)

        # Restyle only when the palette or fonts changed
        if self.theme.apply(QApplication.instance(), settings):
            self.home.refresh_theme()
            self.settings_screen.refresh_theme()
            self.history_screen.refresh()

    # ========================================================
    #                  DIALOGS
    # ========================================================

    def _open_connection_dialog(self):
        dialog = ConnectionDialog(self.backend, self)
        dialog.exec()

    def _open_virtual_monitor(self):
        """Open the virtual glove window, switching to virtual mode if needed."""
        if self.backend.is_connecting():
            self.add_log("Wait for the current connection attempt to finish", "warning")
            return None

        if not self.backend.bluetooth.is_virtual():
            reply = QMessageBox.question(
                self,
                "Virtual Mode Required",
                "The virtual glove requires Virtual Connection mode.\n\n"
                "Would you like to switch to virtual mode now?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No
            )
            if reply != QMessageBox.StandardButton.Yes:
                return None
            self.backend.disconnect()
            self.backend.set_connection_options(mode=CONNECTION_VIRTUAL)
            self.backend.connect()

        monitor = VirtualGloveMonitor(self.backend, self)
        monitor.show()
        return monitor

    def _show_about(self):
        QMessageBox.about(
            self,
            "About HandSpeak",
            "HandSpeak\n\n"
            "Speaks the phrases signed with the GestureGlove.\n\n"
            "• Bluetooth serial link to the glove\n"
            "• Text-to-speech with adjustable volume and speed\n"
            "• Phrase history\n\n"
            "Use Tools → Virtual Glove to try it without hardware."
        )

    # ========================================================
    #                  CLEANUP ON CLOSE
    # ========================================================

    def closeEvent(self, event):
        """Handle window close - clean shutdown."""
        self.backend.cleanup()
        event.accept()
