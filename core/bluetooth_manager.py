"""
Bluetooth link to the glove: serial, direct RFCOMM socket, or virtual.

A single background reader polls the link and hands received text back
through `data_signal`; any read failure is treated as a lost connection.
"""

import platform
import socket
import subprocess
import threading

import serial
import serial.tools.list_ports

from config import (BLUETOOTH_PORT, BLUETOOTH_BAUD, DEFAULT_RFCOMM_CHANNEL,
                    READ_BUFFER_SIZE, READ_POLL_INTERVAL, SERIAL_TIMEOUT, SERIAL_INTER_BYTE_TIMEOUT,
                    SOCKET_TIMEOUT,
                    STATUS_CONNECTING, STATUS_CONNECTED, STATUS_DISCONNECTED,
                    STATUS_FAILED, STATUS_LOST)
from .virtual_glove import VirtualGloveConnection


def parse_bluetoothctl_devices(output):
    """
    Parse `bluetoothctl devices` style output.

    Returns:
        List of {"name", "mac"} dicts
    """
    devices = []
    for line in output.splitlines():
        line = line.strip()
        if not line.startswith("Device "):
            continue
        parts = line.split(" ", 2)
        if len(parts) < 2:
            continue
        devices.append({
            "mac": parts[1],
            "name": parts[2].strip() if len(parts) > 2 else "Unknown",
        })
    return devices


def list_paired_devices():
    """List paired devices via bluetoothctl (Linux only)."""
    if platform.system() != "Linux":
        return []

    # BlueZ >= 5.65 replaced `paired-devices` with `devices Paired`
    for command in (["bluetoothctl", "devices", "Paired"], ["bluetoothctl", "paired-devices"]):
        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=10)
        except FileNotFoundError:
            return []
        except subprocess.TimeoutExpired:
            continue

        if result.returncode == 0:
            devices = parse_bluetoothctl_devices(result.stdout)
            if devices:
                return devices
    return []


def find_paired_device(name, devices=None):
    """
    Find the MAC address of a paired device by exact name.

    Args:
        name: Device name, e.g. "GestureGlove"
        devices: Pre-fetched device list (queried when omitted)

    Returns:
        MAC address string or None
    """
    if devices is None:
        devices = list_paired_devices()
    for device in devices:
        if device["name"] == name:
            return device["mac"]
    return None


def list_serial_ports():
    """List serial port device names (COM ports, /dev/rfcommN, ...)."""
    return sorted(port.device for port in serial.tools.list_ports.comports())


class BluetoothManager:
    """Manages the glove connection and its receive loop."""

    def __init__(self, signal_emitter):
        self.signals = signal_emitter
        self.connection = None
        self.connection_type = None  # 'serial', 'socket', or 'virtual'
        self.lock = threading.Lock()
        self.stop_event = threading.Event()
        self.reader = None

    # ========================================================
    #                  CONNECTING
    # ========================================================

    def connect_serial(self, port=BLUETOOTH_PORT, baud=BLUETOOTH_BAUD):
        """
        Connect via serial port (after rfcomm bind or a COM port bridge).

        Args:
            port: Serial port path
            baud: Baud rate

        Returns:
            True if successful, False otherwise
        """
        self.disconnect(quiet=True)
        self.signals.status_signal.emit(STATUS_CONNECTING)
        self.signals.log_signal.emit(f"Connecting to {port}...", "info")

        try:
            conn = serial.Serial(port, baud, timeout=SERIAL_TIMEOUT,
                                 inter_byte_timeout=SERIAL_INTER_BYTE_TIMEOUT)
        except serial.SerialException as e:
            self.signals.log_signal.emit(f"Serial connection error: {e}", "error")
            self.signals.log_signal.emit("Check: Device exists, permissions, not in use", "warning")
            self.signals.status_signal.emit(STATUS_FAILED)
            return False

        self._attach(conn, 'serial')
        self.signals.log_signal.emit(f"Connected to {port}", "success")
        return True

    def connect_direct(self, mac_address, channel=DEFAULT_RFCOMM_CHANNEL):
        """
        Connect via direct RFCOMM socket.

        Args:
            mac_address: Bluetooth MAC address
            channel: RFCOMM channel number

        Returns:
            True if successful, False otherwise
        """
        self.disconnect(quiet=True)
        self.signals.status_signal.emit(STATUS_CONNECTING)
        self.signals.log_signal.emit(f"Connecting to {mac_address}:{channel}...", "info")

        sock = None
        try:
            sock = socket.socket(socket.AF_BLUETOOTH, socket.SOCK_STREAM, socket.BTPROTO_RFCOMM)
            sock.settimeout(SOCKET_TIMEOUT)
            sock.connect((mac_address, channel))
            # Short timeout so reads behave like polling
            sock.settimeout(READ_POLL_INTERVAL)

        except AttributeError:
            self.signals.log_signal.emit(
                "Direct RFCOMM sockets are not supported on this platform. "
                "Pair the glove and use its serial port instead.", "error")
            self.signals.status_signal.emit(STATUS_FAILED)
            return False

        except socket.timeout:
            self._close_quietly(sock)
            self.signals.log_signal.emit(f"Connection timeout to {mac_address}", "error")
            self.signals.log_signal.emit("Check: Glove is powered on and in range", "warning")
            self.signals.status_signal.emit(STATUS_FAILED)
            return False

        except OSError as e:
            self._close_quietly(sock)
            self.signals.log_signal.emit(f"Connection failed: {e}", "error")
            self.signals.log_signal.emit("Check: Glove is paired in system settings", "warning")
            self.signals.status_signal.emit(STATUS_FAILED)
            return False

        self._attach(sock, 'socket')
        self.signals.log_signal.emit(f"Connected to {mac_address}:{channel}", "success")
        return True

    def connect_virtual(self):
        """
        Connect to the virtual glove (simulation mode).

        Returns:
            True if successful, False otherwise
        """
        self.disconnect(quiet=True)
        conn = VirtualGloveConnection()
        conn.connect()
        self._attach(conn, 'virtual')
        self.signals.log_signal.emit("Virtual glove connected (SIMULATION)", "success")
        return True

    def _attach(self, conn, connection_type):
        with self.lock:
            self.connection = conn
            self.connection_type = connection_type
            self.stop_event = threading.Event()
            self.reader = threading.Thread(
                target=self._receive_loop,
                args=(conn, connection_type, self.stop_event),
                daemon=True
            )
        self.signals.status_signal.emit(STATUS_CONNECTED)
        self.reader.start()

    # ========================================================
    #                  RECEIVING
    # ========================================================

    def _read_chunk(self, conn, connection_type):
        """
        Read whatever the glove has flushed.

        Returns:
            Bytes (empty when nothing arrived), or None at end of stream
        """
        if connection_type == 'serial':
            if not conn.is_open:
                raise serial.SerialException("Port closed")
            # Returns once the line goes quiet, so a flushed token stays whole
            return conn.read(READ_BUFFER_SIZE)

        if connection_type == 'socket':
            try:
                data = conn.recv(READ_BUFFER_SIZE)
            except socket.timeout:
                return b""
            return data if data else None

        return conn.read(READ_BUFFER_SIZE)

    def _receive_loop(self, conn, connection_type, stop_event):
        """Background polling loop for one connection."""
        while not stop_event.is_set():
            try:
                data = self._read_chunk(conn, connection_type)
                if data is None:
                    raise ConnectionError("End of stream reached")

                if data:
                    text = data.decode('ascii', errors='replace').strip()
                    if text:
                        self.signals.data_signal.emit(text)

            except Exception as e:
                if stop_event.is_set():
                    break  # closed by disconnect()
                self.signals.log_signal.emit(f"Connection lost: {e}", "error")
                self._handle_connection_loss(conn, stop_event)
                break

            stop_event.wait(READ_POLL_INTERVAL)

    def _handle_connection_loss(self, conn, stop_event):
        """Close a link that failed while reading."""
        with self.lock:
            stop_event.set()
            if self.connection is not conn:
                return
            self._close_locked()

        self.signals.status_signal.emit(STATUS_LOST)
        self.signals.connection_lost_signal.emit()

    # ========================================================
    #                  DISCONNECTING
    # ========================================================

    def _close_locked(self):
        conn = self.connection
        self.connection = None
        self.connection_type = None
        if conn is None:
            return
        try:
            conn.close()
        except Exception as e:
            self.signals.log_signal.emit(f"Error closing connection: {e}", "warning")

    @staticmethod
    def _close_quietly(sock):
        if sock is None:
            return
        try:
            sock.close()
        except OSError:
            pass

    def disconnect(self, quiet=False):
        """
        Stop the receive loop and close the link.

        Args:
            quiet: Skip status/log signals (used before reconnecting)
        """
        with self.lock:
            had_connection = self.connection is not None
            self.stop_event.set()
            self._close_locked()
            reader = self.reader
            self.reader = None

        if reader is not None and reader is not threading.current_thread():
            reader.join(timeout=1.0)

        if had_connection and not quiet:
            self.signals.log_signal.emit("Disconnected", "info")
            self.signals.status_signal.emit(STATUS_DISCONNECTED)

    def is_connected(self):
        """Check if connected."""
        return self.connection is not None

    def is_virtual(self):
        """Check if using the virtual glove."""
        return self.connection_type == 'virtual'

    def inject(self, code):
        """Feed a gesture code into the virtual glove."""
        with self.lock:
            conn = self.connection if self.connection_type == 'virtual' else None
        if conn is None:
            self.signals.log_signal.emit("Not in virtual mode - code not injected", "warning")
            return False
        return conn.inject(code)
