"""
Core business logic modules.
"""

from .glove_backend import GloveBackend
from .bluetooth_manager import BluetoothManager
from .virtual_glove import VirtualGloveConnection
from .gesture_map import GestureMap, normalize_code
from .gesture_processor import GestureProcessor, GestureResult
from .history_manager import HistoryManager, HistoryItem
from .preferences import Preferences
from .settings_manager import Settings, SettingsManager
from .speech_engine import SpeechEngine

__all__ = ['GloveBackend', 'BluetoothManager', 'VirtualGloveConnection',
           'GestureMap', 'normalize_code', 'GestureProcessor', 'GestureResult',
           'HistoryManager', 'HistoryItem', 'Preferences', 'Settings',
           'SettingsManager', 'SpeechEngine']
