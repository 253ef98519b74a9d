from __future__ import annotations
import logging
from typing import List

from PySide6.QtCore import Qt
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QListWidget, QListWidgetItem, QCheckBox,
    QPushButton, QMessageBox, QHBoxLayout, QTextEdit, QInputDialog
)

from efi_switch.customization import apply_custom_order, move_in_order, with_custom_name
from efi_switch.display import build_display_entries
from efi_switch.platforms.linux import LinuxBootManager
from efi_switch.settings import CustomizationStore
from efi_switch.models import BootEntry, CustomizationConfig, DisplayEntry

logger = logging.getLogger(__name__)


class BootSwitchApp(QWidget):
    def __init__(self, manager: LinuxBootManager | None = None, store: CustomizationStore | None = None):
        super().__init__()
        self.setWindowTitle('Next Boot Entry')
        self.resize(640, 420)

        self.manager = manager if manager is not None else LinuxBootManager()
        self.store = store if store is not None else CustomizationStore()
        self.entries: List[BootEntry] = []
        self.config = CustomizationConfig()

        self._build_ui()
        self.refresh()

    def _build_ui(self):
        layout = QVBoxLayout(self)

        self.show_hidden = QCheckBox('Show hidden entries')
        layout.addWidget(self.show_hidden)

        self.list = QListWidget()
        layout.addWidget(self.list)

        edit_row = QHBoxLayout()
        self.btn_up = QPushButton('Move up')
        self.btn_down = QPushButton('Move down')
        self.btn_hide = QPushButton('Hide / show')
        self.btn_rename = QPushButton('Rename')
        self.btn_reset = QPushButton('Reset order')
        for b in (self.btn_up, self.btn_down, self.btn_hide, self.btn_rename, self.btn_reset):
            edit_row.addWidget(b)
        layout.addLayout(edit_row)

        btn_row = QHBoxLayout()
        self.btn_refresh = QPushButton('Refresh')
        self.btn_apply = QPushButton('Boot this next')
        self.btn_reboot = QPushButton('Reboot now')
        btn_row.addWidget(self.btn_refresh)
        btn_row.addWidget(self.btn_apply)
        btn_row.addWidget(self.btn_reboot)
        layout.addLayout(btn_row)

        layout.addWidget(QLabel('Log'))
        self.log = QTextEdit()
        self.log.setReadOnly(True)
        layout.addWidget(self.log, 1)

        self.show_hidden.toggled.connect(self.populate)
        self.btn_up.clicked.connect(lambda: self.move_selection(-1))
        self.btn_down.clicked.connect(lambda: self.move_selection(1))
        self.btn_hide.clicked.connect(self.toggle_hidden)
        self.btn_rename.clicked.connect(self.rename_selection)
        self.btn_reset.clicked.connect(self.reset_order)
        self.btn_refresh.clicked.connect(self.refresh)
        self.btn_apply.clicked.connect(self.apply_selection)
        self.btn_reboot.clicked.connect(self.reboot_now)

    def log_line(self, text: str):
        self.log.append(text)

    def refresh(self):
        self.list.clear()
        if not self.manager.available():
            QMessageBox.warning(self, 'Unavailable', 'efibootmgr was not found. Install it to manage UEFI boot entries.')
            return
        self.entries = self.manager.list_entries()
        self.config = self.store.reconcile([e.boot_num for e in self.entries])
        self.populate()
        self.log_line(f'Found {len(self.entries)} boot entries')

    def populate(self):
        self.list.clear()
        rows = build_display_entries(self.entries, self.config, show_hidden=self.show_hidden.isChecked())
        for r in rows:
            text = f"{r.label}  [{r.entry.boot_num}]"
            if r.entry.is_current:
                text += "  (current)"
            if r.entry.is_next:
                text += "  (next)"
            if r.hidden:
                text += "  (hidden)"
            item = QListWidgetItem(QIcon.fromTheme(r.icon), text)
            item.setData(Qt.UserRole, r)
            if r.entry.efi_path:
                item.setToolTip(r.entry.efi_path)
            self.list.addItem(item)

    def _selected(self) -> DisplayEntry | None:
        item = self.list.currentItem()
        if not item:
            QMessageBox.information(self, 'Notice', 'Select a boot entry first')
            return None
        return item.data(Qt.UserRole)

    def _save(self, config: CustomizationConfig):
        self.config = config
        self.store.save(config)
        self.populate()

    def move_selection(self, step: int):
        row = self._selected()
        if row is None:
            return
        visible = [self.list.item(i).data(Qt.UserRole).entry.boot_num for i in range(self.list.count())]
        order = [e.boot_num for e in apply_custom_order(self.entries, self.config.custom_order)]
        moved = move_in_order(order, visible, row.entry.boot_num, step)
        if moved is None:
            return
        self._save(self.config.with_order(moved))
        self.list.setCurrentRow(visible.index(row.entry.boot_num) + step)

    def toggle_hidden(self):
        row = self._selected()
        if row is None:
            return
        self._save(self.config.with_hidden(row.entry.boot_num, not row.hidden))

    def rename_selection(self):
        row = self._selected()
        if row is None:
            return
        label, ok = QInputDialog.getText(self, 'Rename', 'Display name (empty restores the firmware name):', text=row.label)
        if ok:
            self._save(with_custom_name(self.config, row.entry.boot_num, label))

    def reset_order(self):
        self._save(self.config.with_order([]))

    def apply_selection(self):
        row = self._selected()
        if row is None:
            return
        ok, msg = self.manager.set_next(row.entry.boot_num)
        if ok:
            QMessageBox.information(self, 'Done', msg)
            self.log_line(msg)
            self.refresh()
        else:
            QMessageBox.critical(self, 'Failed', msg)
            self.log_line('Error: ' + msg)

    def reboot_now(self):
        ret = QMessageBox.question(self, 'Confirm reboot', 'Reboot now? Save your work first.')
        if ret != QMessageBox.Yes:
            return
        ok, msg = self.manager.reboot_now()
        if not ok:
            QMessageBox.critical(self, 'Failed', msg)
            self.log_line('Error: ' + msg)
