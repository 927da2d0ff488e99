"""
Configuration and Constants
All global configuration values for the HandSpeak glove companion.
"""

# ============================================================
#                    BLUETOOTH CONFIGURATION
# ============================================================
GLOVE_DEVICE_NAME = "GestureGlove"
SPP_UUID = "00001101-0000-1000-8000-00805F9B34FB"  # Serial Port Profile
DEFAULT_RFCOMM_CHANNEL = 1
BLUETOOTH_PORT = "/dev/rfcomm0"
BLUETOOTH_BAUD = 9600

READ_BUFFER_SIZE = 1024
READ_POLL_INTERVAL = 0.1  # seconds between reads
SERIAL_TIMEOUT = 0.1
SERIAL_INTER_BYTE_TIMEOUT = 0.01  # gap that ends one flushed token
SOCKET_TIMEOUT = 10.0
CONNECT_JOIN_TIMEOUT = SOCKET_TIMEOUT + 1.0  # wait for a pending connect on shutdown

# Connection modes
CONNECTION_BLUETOOTH = "bluetooth"
CONNECTION_SERIAL = "serial"
CONNECTION_VIRTUAL = "virtual"

# Connection status strings
STATUS_DISCONNECTED = "Disconnected"
STATUS_CONNECTING = "Connecting..."
STATUS_CONNECTED = "Connected"
STATUS_FAILED = "Failed to connect"
STATUS_LOST = "Connection Lost"

# ============================================================
#                    SPEECH CONFIGURATION
# ============================================================
SPEECH_COOLDOWN = 2.0  # seconds before the same phrase is spoken again
BASE_SPEECH_RATE_WPM = 175

VOLUME_RANGE = (0.0, 1.0)
SPEECH_SPEED_RANGE = (0.5, 2.0)

LANGUAGE_CODES = {
    "English": "en",
    "Hindi": "hi",
    "Marathi": "mr",
    "Tamil": "ta",
    "Telugu": "te",
}

# ============================================================
#                    SETTINGS
# ============================================================
LANGUAGE_OPTIONS = list(LANGUAGE_CODES.keys())
VOICE_TYPE_OPTIONS = ["Male", "Female"]
FONT_SIZE_OPTIONS = ["Small", "Medium", "Large"]

DEFAULT_SETTINGS = {
    "volume": 0.8,
    "speech_speed": 1.0,
    "language": "English",
    "voice_type": "Male",
    "font_size": "Large",
    "dark_theme": False,
}

# ============================================================
#                    PERSISTENCE
# ============================================================
PREFS_FILE = "handspeak_prefs.json"
GESTURE_MAP_FILE = "gesture_map.json"
HISTORY_KEY = "history"

# ============================================================
#                    UI CONFIGURATION
# ============================================================
WINDOW_TITLE = "HandSpeak"
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 820
MAX_LOG_LINES = 500

PLACEHOLDER_PHRASE = "Recognized text will appear here"
UNKNOWN_PREFIX = "Unknown: "

# Point sizes for the phrase card
FONT_SIZES = {
    "Small": 14,
    "Medium": 18,
    "Large": 24,
}

# Palette
BG_BEIGE = "#F5F0E1"
MUTED_GREEN = "#ADC1B1"
MUTED_BLUE = "#B8D0EB"
DARK_BLUE = "#1B263B"
SOFT_RED = "#EF9A9A"
LIGHT_RED = "#FFCDD2"
BG_DARK = "#121212"
SURFACE_DARK = "#1E1E1E"
ON_SURFACE_DARK = "#E1E1E1"

# ============================================================
#                    DEFAULT MAPPINGS
# ============================================================

# Glove gesture codes -> spoken phrases
DEFAULT_GESTURE_MAPPING = {
    "A": "Hello",
    "B": "Thank you",
    "C": "I need help",
    "D": "I am hungry",
    "E": "I need water",
    "F": "Yes",
    "G": "No",
    "H": "Please",
    "I": "I am fine",
    "J": "Call my family",
    "K": "I need to use the washroom",
    "L": "I am not feeling well",
    "M": "Good morning",
    "N": "Good night",
    "O": "Sorry",
    "P": "Stop",
}
