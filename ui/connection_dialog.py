"""
Dialog for choosing how to reach the glove.
"""

import threading

from PySide6.QtWidgets import (QDialog, QVBoxLayout, QFormLayout, QComboBox, QLineEdit,
                               QSpinBox, QPushButton, QDialogButtonBox, QGroupBox,
                               QRadioButton, QHBoxLayout)
from PySide6.QtCore import Signal, Slot

from config import CONNECTION_BLUETOOTH, CONNECTION_SERIAL, CONNECTION_VIRTUAL, SPP_UUID
from core.bluetooth_manager import list_paired_devices, list_serial_ports


class ConnectionDialog(QDialog):
    """Edit the backend's connection options."""

    devices_found = Signal(list)

    def __init__(self, backend, parent=None):
        super().__init__(parent)
        self.backend = backend
        self.setWindowTitle("Glove Connection")
        self.setMinimumWidth(420)
        self._init_ui()
        self._load(backend.connection_options)
        self.devices_found.connect(self._update_devices)

    def _init_ui(self):
        layout = QVBoxLayout(self)

        mode_group = QGroupBox("Connect via")
        mode_layout = QVBoxLayout(mode_group)
        self.bt_radio = QRadioButton("Paired Bluetooth glove (RFCOMM)")
        self.serial_radio = QRadioButton("Serial port (rfcomm bind / COM port)")
        self.virtual_radio = QRadioButton("Virtual glove (testing mode)")
        for radio in (self.bt_radio, self.serial_radio, self.virtual_radio):
            radio.toggled.connect(self._update_enabled)
            mode_layout.addWidget(radio)
        layout.addWidget(mode_group)

        self.bt_group = QGroupBox("Bluetooth")
        self.bt_group.setToolTip(f"Serial Port Profile {SPP_UUID}")
        bt_form = QFormLayout(self.bt_group)
        self.name_edit = QLineEdit()
        bt_form.addRow("Device name", self.name_edit)
        mac_row = QHBoxLayout()
        self.mac_combo = QComboBox()
        self.mac_combo.setEditable(True)
        mac_row.addWidget(self.mac_combo, 1)
        self.refresh_btn = QPushButton("Paired Devices")
        self.refresh_btn.clicked.connect(self.fetch_paired_devices)
        mac_row.addWidget(self.refresh_btn)
        bt_form.addRow("MAC (optional)", mac_row)
        self.channel_spin = QSpinBox()
        self.channel_spin.setRange(1, 30)
        bt_form.addRow("RFCOMM channel", self.channel_spin)
        layout.addWidget(self.bt_group)

        self.serial_group = QGroupBox("Serial")
        serial_form = QFormLayout(self.serial_group)
        self.port_combo = QComboBox()
        self.port_combo.setEditable(True)
        serial_form.addRow("Port", self.port_combo)
        self.baud_combo = QComboBox()
        self.baud_combo.addItems(["9600", "19200", "38400", "57600", "115200"])
        serial_form.addRow("Baud", self.baud_combo)
        layout.addWidget(self.serial_group)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok |
                                   QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _load(self, options):
        {
            CONNECTION_BLUETOOTH: self.bt_radio,
            CONNECTION_SERIAL: self.serial_radio,
            CONNECTION_VIRTUAL: self.virtual_radio,
        }[options['mode']].setChecked(True)

        self.name_edit.setText(options['device_name'])
        self.mac_combo.setEditText(options['mac'] or "")
        self.channel_spin.setValue(options['channel'])

        self.port_combo.addItems(list_serial_ports())
        self.port_combo.setEditText(options['port'])
        self.baud_combo.setCurrentText(str(options['baud']))
        self._update_enabled()

    def _update_enabled(self):
        self.bt_group.setEnabled(self.bt_radio.isChecked())
        self.serial_group.setEnabled(self.serial_radio.isChecked())

    def fetch_paired_devices(self):
        """Query paired devices in the background."""
        self.refresh_btn.setEnabled(False)
        threading.Thread(
            target=lambda: self.devices_found.emit(list_paired_devices()),
            daemon=True
        ).start()

    @Slot(list)
    def _update_devices(self, devices):
        self.refresh_btn.setEnabled(True)
        current = self.mac_combo.currentText()
        self.mac_combo.clear()
        for device in devices:
            self.mac_combo.addItem(f"{device['mac']}", device['name'])
        self.mac_combo.setEditText(current)
        if not devices:
            self.backend.signals.log_signal.emit(
                "No paired devices found. Pair the glove in system settings first.", "warning")

    def selected_options(self):
        """Connection options as entered."""
        if self.serial_radio.isChecked():
            mode = CONNECTION_SERIAL
        elif self.virtual_radio.isChecked():
            mode = CONNECTION_VIRTUAL
        else:
            mode = CONNECTION_BLUETOOTH

        return {
            'mode': mode,
            'device_name': self.name_edit.text().strip() or self.backend.connection_options['device_name'],
            'mac': self.mac_combo.currentText().strip() or None,
            'channel': self.channel_spin.value(),
            'port': self.port_combo.currentText().strip(),
            'baud': int(self.baud_combo.currentText()),
        }

    def accept(self):
        self.backend.set_connection_options(**self.selected_options())
        super().accept()
