"""
User interface components.
"""

from .signal_emitter import SignalEmitter
from .main_window import HandSpeakWindow
from .theme_manager import ThemeManager
from .home_screen import HomeScreen
from .history_screen import HistoryScreen
from .settings_screen import SettingsScreen
from .connection_dialog import ConnectionDialog
from .virtual_glove_monitor import VirtualGloveMonitor

__all__ = ['SignalEmitter', 'HandSpeakWindow', 'ThemeManager', 'HomeScreen',
           'HistoryScreen', 'SettingsScreen', 'ConnectionDialog', 'VirtualGloveMonitor']
