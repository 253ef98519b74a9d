from __future__ import annotations
import logging
import re
from typing import List

from . import common
from efi_switch.entries import parse_entry_name
from efi_switch.models import BootEntry

logger = logging.getLogger(__name__)

_BOOT_LINE_RE = re.compile(r"^Boot([0-9A-Fa-f]{4})(\*?)[ \t]+(.*)$", re.MULTILINE)


def parse_efibootmgr(text: str) -> List[BootEntry]:
    """Build boot entries from the plain ``efibootmgr`` listing."""
    current = re.search(r"BootCurrent:\s*(\w+)", text)
    next_ = re.search(r"BootNext:\s*(\w+)", text)
    cur = current.group(1) if current else None
    nxt = next_.group(1) if next_ else None
    entries: List[BootEntry] = []
    for m in _BOOT_LINE_RE.finditer(text):
        bid, star, raw = m.group(1), m.group(2), m.group(3)
        parsed = parse_entry_name(raw)
        entries.append(BootEntry(
            boot_num=bid,
            name=parsed.name,
            efi_path=parsed.efi_path,
            active=bool(star),
            is_current=(bid == cur),
            is_next=(bid == nxt),
        ))
    return entries


class LinuxBootManager:
    def __init__(self) -> None:
        self.efibootmgr = common.which('efibootmgr')

    def available(self) -> bool:
        return self.efibootmgr is not None

    def list_entries(self) -> List[BootEntry]:
        if not self.efibootmgr:
            return []
        cp = common.run([self.efibootmgr])
        if cp.returncode != 0:
            logger.warning('efibootmgr failed (rc=%s): %s', cp.returncode, (cp.stderr or '').strip())
            return []
        entries = parse_efibootmgr(cp.stdout or '')
        logger.debug('efibootmgr reported %d boot entries', len(entries))
        return entries

    def set_next(self, boot_num: str) -> tuple[bool, str]:
        if not self.efibootmgr:
            return False, 'efibootmgr not found'
        if not common.is_admin():
            return False, 'Root privileges are required to set BootNext with efibootmgr'
        cp = common.run([self.efibootmgr, '-n', boot_num])
        if cp.returncode == 0:
            return True, 'Next boot entry set: ' + boot_num
        return False, cp.stderr or cp.stdout

    def reboot_now(self) -> tuple[bool, str]:
        if not common.is_admin():
            return False, 'Root privileges are required to reboot'
        cp = common.run(['systemctl', 'reboot'])
        return (cp.returncode == 0, cp.stderr or cp.stdout)
