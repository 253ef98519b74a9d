"""Normalize and classify firmware boot-entry descriptions.

Input lines are the descriptions printed by ``efibootmgr`` after the
``Boot####`` prefix, e.g. ``"Windows Boot Manager\\tHD(1,GPT,...)/File(...)"``.
"""
from __future__ import annotations
import re
from typing import Callable, Optional, Sequence, Tuple

from .models import EntryName


_DEVICE_PATH_RE = re.compile(
    r"^(.+?)\s+((?:HD|BBS|PciRoot|File|VenHw|VenMedia|UsbClass|Fv|ACPI)\(.*)\Z"
)
_EFI_FILE_RE = re.compile(r"^(.+?)\s+((?:File\()?\\EFI\\.+)\Z", re.IGNORECASE)
_UEFI_PREFIX_RE = re.compile(r"^UEFI:\s*", re.IGNORECASE)
_UEFI_OS_RE = re.compile(r"UEFI OS(\s*\(.*\))?")


def _split_at_tab(raw: str) -> Optional[EntryName]:
    # efibootmgr separates the label from the device path with a tab
    name, sep, path = raw.partition('\t')
    if not sep:
        return None
    return EntryName(name.strip(), path.strip())


def _match_device_path(raw: str) -> Optional[EntryName]:
    m = _DEVICE_PATH_RE.match(raw)
    if m:
        return EntryName(m.group(1).strip(), m.group(2).strip())
    return None


def _match_efi_file(raw: str) -> Optional[EntryName]:
    m = _EFI_FILE_RE.match(raw)
    if m:
        return EntryName(m.group(1).strip(), m.group(2).strip())
    return None


def _name_only(raw: str) -> Optional[EntryName]:
    return EntryName(raw.strip(), '')


NAME_STRATEGIES: Tuple[Callable[[str], Optional[EntryName]], ...] = (
    _split_at_tab,
    _match_device_path,
    _match_efi_file,
    _name_only,
)


def parse_entry_name(raw_name: str) -> EntryName:
    """Split a raw listing line into a display name and a device path.

    Strategies are tried in order and the first match wins. A leading
    ``UEFI:`` tag is dropped from the name.
    """
    for strategy in NAME_STRATEGIES:
        parsed = strategy(raw_name)
        if parsed is not None:
            break
    return EntryName(_UEFI_PREFIX_RE.sub('', parsed.name, count=1), parsed.efi_path)


_ICON_RULES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (('windows',), 'computer'),
    (('usb', 'removable', 'flash', 'thumb'), 'drive-removable-media-usb'),
    (('network', 'pxe', 'ipv4', 'ipv6', 'http boot', 'uefi: pxe', 'lan'), 'network-wired'),
    (('cd-rom', 'cd/dvd', 'dvd', 'optical', 'cdrom'), 'media-optical'),
    (('shell',), 'utilities-terminal'),
    (('firmware', 'setup', 'bios'), 'preferences-system'),
)
DEFAULT_ICON = 'drive-harddisk'


def boot_entry_icon(name: str) -> str:
    """Return a freedesktop icon name for a boot entry label."""
    lower = name.lower()
    for keywords, icon in _ICON_RULES:
        if any(k in lower for k in keywords):
            return icon
    return DEFAULT_ICON


def is_uefi_os_duplicate(name: str) -> bool:
    """True for the generic ``UEFI OS`` / ``UEFI OS (...)`` entries firmware synthesizes."""
    return _UEFI_OS_RE.fullmatch(name.strip()) is not None
