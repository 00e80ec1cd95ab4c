"""
Tray Indicator - panel menu for switching the prime GPU profile
"""

from PySide6.QtWidgets import QSystemTrayIcon, QMenu, QApplication
from PySide6.QtGui import QAction, QActionGroup, QIcon
from PySide6.QtCore import QObject, Slot

import config
from backend.prime_switch import PrimeSwitch
from models.gpu_model import SwitchResult, gpu_label
from utils.logger import logger


ICONS = {
    config.GPU_INTEL: "video-display",
    config.GPU_NVIDIA: "nvidia",
    config.GPU_ON_DEMAND: "nvidia",
}


class TrayIndicator(QObject):
    """System tray icon showing the active GPU with a switch menu"""

    def __init__(self, switch: PrimeSwitch, parent=None):
        super().__init__(parent)
        self.switch = switch
        self.busy = False

        self.tray = QSystemTrayIcon(self)
        self.menu = QMenu()
        self.target_actions = {}

        self._setup_menu()
        self.refresh()

        self.switch.gpu_changed.connect(self._on_gpu_changed)
        self.switch.switched.connect(self._on_switched)
        self.tray.setContextMenu(self.menu)

    def _setup_menu(self):
        """Setup tray menu"""
        self.header_action = QAction(self.menu)
        self.header_action.setEnabled(False)
        self.menu.addAction(self.header_action)
        self.menu.addSeparator()

        group = QActionGroup(self.menu)
        group.setExclusive(True)
        can_switch = bool(self.switch.command('sudo') and self.switch.command('select'))

        for target in config.GPU_TARGETS:
            action = QAction(f"Use {gpu_label(target)}", self.menu)
            action.setCheckable(True)
            action.setEnabled(can_switch)
            action.triggered.connect(lambda checked=False, gpu=target: self._request_switch(gpu))
            group.addAction(action)
            self.menu.addAction(action)
            self.target_actions[target] = action

        self.menu.addSeparator()

        self.settings_action = QAction("NVIDIA Settings", self.menu)
        self.settings_action.setEnabled(bool(self.switch.command('settings')))
        self.settings_action.triggered.connect(lambda checked=False: self.switch.settings())
        self.menu.addAction(self.settings_action)

        quit_action = QAction("Quit", self.menu)
        quit_action.triggered.connect(QApplication.quit)
        self.menu.addAction(quit_action)

    def refresh(self, gpu: str = None):
        """Update header, icon and checked profile"""
        gpu = gpu or self.switch.gpu
        selected = self.switch.query

        self.header_action.setText(f"Active GPU: {gpu_label(gpu)}")
        self.tray.setToolTip(f"{config.APP_NAME}: {gpu_label(gpu)}")
        self.tray.setIcon(QIcon.fromTheme(ICONS.get(gpu, "video-display")))

        for target, action in self.target_actions.items():
            action.setChecked(target == selected)

    def show(self):
        self.tray.show()

    def _request_switch(self, gpu: str):
        if self.busy:
            return
        if self.switch.switch(gpu):
            self.busy = True
            for action in self.target_actions.values():
                action.setEnabled(False)
            self.header_action.setText(f"Switching to {gpu_label(gpu)}...")
        else:
            # Re-check the real selection
            self.refresh()

    @Slot(str)
    def _on_gpu_changed(self, gpu: str):
        logger.info(f"GPU profile changed, active GPU: {gpu}")
        self.refresh(gpu)

    @Slot(object)
    def _on_switched(self, result: SwitchResult):
        self.busy = False
        for action in self.target_actions.values():
            action.setEnabled(True)
        self.refresh()

        icon = QSystemTrayIcon.MessageIcon.Information if result.result else QSystemTrayIcon.MessageIcon.Warning
        self.tray.showMessage(config.APP_NAME, result.status_text, icon)
