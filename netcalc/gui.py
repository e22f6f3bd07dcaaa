#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Graphical user interface for NetCalc.
"""
import logging
import sys
import traceback

from PyQt5.QtCore import QPropertyAnimation, Qt, QTimer
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QApplication,
    QComboBox,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from . import __version__ as VERSION
from . import core
from .session import (
    COPY_FADE_DELAY_MS,
    COPY_FADE_DURATION_MS,
    COPY_HIDE_DELAY_MS,
    CalculatorSession,
    State,
)

# Configure logging
logging.basicConfig(
    handlers=[logging.StreamHandler(sys.stderr)],
    level=logging.WARNING,
    format=core.LOG_FORMAT,
    datefmt=core.LOG_DATEFMT
)
logger = logging.getLogger(__name__)

NETWORK_PLACEHOLDER = "Select Network/CIDR"
IP_PLACEHOLDER = "192.168.100.10"
ERROR_STYLE = "QLabel { color: #b00020; font-weight: bold; }"
READONLY_STYLE = "QLineEdit { background-color: #f0f0f0; color: #333; }"


class ClickToCopyLineEdit(QLineEdit):
    """QLineEdit that copies text to clipboard when clicked."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)

    def mousePressEvent(self, event):
        super().mousePressEvent(event)
        if self.text():
            QApplication.clipboard().setText(self.text())


class CopiedLabel(QLabel):
    """
    "Copied" notice with timed feedback.

    Shown fully opaque, starts fading after COPY_FADE_DELAY_MS and is hidden
    after COPY_HIDE_DELAY_MS. Calling flash() again restarts both timers.
    """

    def __init__(self, parent=None):
        super().__init__("Copied", parent)
        self.setStyleSheet("QLabel { color: green; }")
        self.opacity_effect = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self.opacity_effect)

        self.fade_animation = QPropertyAnimation(self.opacity_effect, b"opacity", self)
        self.fade_animation.setDuration(COPY_FADE_DURATION_MS)
        self.fade_animation.setStartValue(1.0)
        self.fade_animation.setEndValue(0.0)

        self.fade_timer = QTimer(self)
        self.fade_timer.setSingleShot(True)
        self.fade_timer.timeout.connect(self.fade_animation.start)

        self.hide_timer = QTimer(self)
        self.hide_timer.setSingleShot(True)
        self.hide_timer.timeout.connect(self.hide)

        self.hide()

    def flash(self):
        self.cancel()
        self.opacity_effect.setOpacity(1.0)
        self.show()
        self.fade_timer.start(COPY_FADE_DELAY_MS)
        self.hide_timer.start(COPY_HIDE_DELAY_MS)

    def cancel(self):
        self.fade_timer.stop()
        self.hide_timer.stop()
        self.fade_animation.stop()
        self.hide()


class NetCalcGUI(QWidget):
    def __init__(self):
        super().__init__()
        logger.info("Initializing NetCalc application")
        self.session = CalculatorSession()
        self.init_ui()
        self.render_state()
        logger.info("NetCalc application initialized successfully")

    def init_ui(self):
        main_layout = QVBoxLayout()
        self.setWindowTitle("Network Calculator")
        input_width = 220
        font = QFont("Ubuntu", 12)
        # Fallback font if Ubuntu is not available
        if not font.exactMatch():
            font = QFont("Arial", 12)

        title = QLabel("Network Calculator")
        title_font = QFont(font)
        title_font.setPointSize(16)
        title_font.setBold(True)
        title.setFont(title_font)
        title.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(title)

        network_layout = QHBoxLayout()
        network_label = QLabel("Network/CIDR")
        network_label.setFont(font)
        self.network_selector = QComboBox(self)
        self.network_selector.setEditable(True)
        self.network_selector.setInsertPolicy(QComboBox.NoInsert)
        self.network_selector.setFont(font)
        self.network_selector.lineEdit().setPlaceholderText(NETWORK_PLACEHOLDER)
        for label, value in core.PREDEFINED_NETWORKS:
            self.network_selector.addItem(f"{label} ({value})", value)
        self.network_selector.setCurrentIndex(-1)
        self.network_selector.setFixedWidth(input_width)
        self.network_selector.activated.connect(self.on_preset_selected)
        self.network_selector.editTextChanged.connect(self.on_network_edited)
        network_layout.addWidget(network_label)
        network_layout.addWidget(self.network_selector)
        main_layout.addLayout(network_layout)

        ip_layout = QHBoxLayout()
        ip_label = QLabel("IP Address")
        ip_label.setFont(font)
        self.ip_input = QLineEdit(self)
        self.ip_input.setPlaceholderText(IP_PLACEHOLDER)
        self.ip_input.setFont(font)
        self.ip_input.setFixedWidth(input_width)
        self.ip_input.textChanged.connect(self.on_ip_edited)
        self.ip_input.returnPressed.connect(self.calculate_network)
        ip_layout.addWidget(ip_label)
        ip_layout.addWidget(self.ip_input)
        main_layout.addLayout(ip_layout)

        self.calc_button = QPushButton("Calculate", self)
        self.calc_button.setFont(font)
        self.calc_button.clicked.connect(self.calculate_network)
        main_layout.addWidget(self.calc_button)

        self.error_label = QLabel(self)
        self.error_label.setFont(font)
        self.error_label.setStyleSheet(ERROR_STYLE)
        self.error_label.setAlignment(Qt.AlignCenter)
        self.error_label.setWordWrap(True)
        main_layout.addWidget(self.error_label)

        self.result_panel = QWidget(self)
        result_layout = QVBoxLayout()
        result_layout.setContentsMargins(0, 0, 0, 0)
        self.network_output = ClickToCopyLineEdit(self)
        self.ip_output = ClickToCopyLineEdit(self)
        self.gateway_output = ClickToCopyLineEdit(self)
        self.netmask_output = ClickToCopyLineEdit(self)
        self.dns1_output = ClickToCopyLineEdit(self)
        self.dns2_output = ClickToCopyLineEdit(self)

        for label_text, field in [
            ("Network Address", self.network_output),
            ("IP", self.ip_output),
            ("Gateway", self.gateway_output),
            ("Subnet Mask", self.netmask_output),
            ("DNS1", self.dns1_output),
            ("DNS2", self.dns2_output),
        ]:
            field.setStyleSheet(READONLY_STYLE)
            field.setAlignment(Qt.AlignRight)
            field.setFont(font)
            field.setFixedWidth(input_width)
            self.add_output_field(result_layout, label_text, field)

        copy_layout = QHBoxLayout()
        self.copy_button = QPushButton("Copy Results", self)
        self.copy_button.setFont(font)
        self.copy_button.clicked.connect(self.copy_results)
        self.copied_label = CopiedLabel(self)
        self.copied_label.setFont(font)
        copy_layout.addWidget(self.copy_button)
        copy_layout.addWidget(self.copied_label)
        copy_layout.addStretch()
        result_layout.addLayout(copy_layout)
        self.result_panel.setLayout(result_layout)
        main_layout.addWidget(self.result_panel)

        self.status_label = QLabel(f"NetCalc {VERSION}")
        self.status_label.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(self.status_label)

        self.setLayout(main_layout)

    def add_output_field(self, layout, label_text: str, field):
        """Add a labeled output field to the layout."""
        field_layout = QHBoxLayout()
        label = QLabel(label_text)
        label.setFont(field.font())
        field_layout.addWidget(label)
        field_layout.addWidget(field)
        layout.addLayout(field_layout)

    def network_text(self) -> str:
        """Network text: preset value when a preset entry is shown, else the typed text."""
        index = self.network_selector.currentIndex()
        text = self.network_selector.currentText()
        if index >= 0 and text == self.network_selector.itemText(index):
            return self.network_selector.itemData(index)
        return text

    def on_preset_selected(self, index: int):
        self.session.set_network(self.network_text())
        self.render_state()

    def on_network_edited(self, text: str):
        self.session.set_network(self.network_text())
        self.render_state()

    def on_ip_edited(self, text: str):
        self.session.set_ip(text)
        self.render_state()

    def calculate_network(self):
        """Calculate network information and update the display."""
        self.session.set_network(self.network_text())
        self.session.set_ip(self.ip_input.text())
        logger.info(f"Calculating {self.session.network_text!r} for {self.session.ip_text!r}")
        self.session.calculate()
        self.render_state()

    def render_state(self):
        """Bring the widgets in line with the session state."""
        result = self.session.result
        if self.session.state is State.SUCCESS:
            self.network_output.setText(result.network_address)
            self.ip_output.setText(result.ip)
            self.gateway_output.setText(result.gateway)
            self.netmask_output.setText(result.subnet_mask)
            self.dns1_output.setText(result.dns1)
            self.dns2_output.setText(result.dns2)
            self.result_panel.show()
        else:
            for field in (self.network_output, self.ip_output, self.gateway_output,
                          self.netmask_output, self.dns1_output, self.dns2_output):
                field.clear()
            self.copied_label.cancel()
            self.result_panel.hide()

        self.error_label.setText(self.session.error_message)
        self.error_label.setVisible(self.session.state is State.FAILED)

    def copy_results(self):
        """Copy IP, gateway, subnet and DNS to the clipboard and flash the notice."""
        text = self.session.copy_text()
        if text is None:
            return
        try:
            QApplication.clipboard().setText(text)
        except Exception as e:
            logger.warning(f"Clipboard copy failed: {type(e).__name__} {str(e)}")
            return
        self.copied_label.flash()


def main() -> int:
    """
    Run GUI mode.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        app = QApplication(sys.argv)
        window = NetCalcGUI()
        window.show()
        return app.exec_()
    except Exception as e:
        logger.error(
            f"GUI failed: {type(e).__name__} {str(e)}\n{traceback.format_exc()}"
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
