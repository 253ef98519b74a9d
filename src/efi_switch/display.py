from __future__ import annotations
import re
from typing import List, Optional, Sequence

from .customization import apply_custom_order, custom_names_of
from .entries import boot_entry_icon, is_uefi_os_duplicate
from .models import BootEntry, CustomizationConfig, DisplayEntry


_HD_NODE_RE = re.compile(r"HD\(([^)]*)\)", re.IGNORECASE)


def _disk_key(efi_path: str) -> Optional[str]:
    m = _HD_NODE_RE.search(efi_path)
    return m.group(1).lower() if m else None


def suppressed_duplicates(entries: Sequence[BootEntry]) -> set:
    """Boot numbers of ``UEFI OS`` entries shadowed by a named entry on the same partition."""
    named_disks = {
        _disk_key(e.efi_path) for e in entries
        if not is_uefi_os_duplicate(e.name)
    }
    named_disks.discard(None)
    return {
        e.boot_num for e in entries
        if is_uefi_os_duplicate(e.name) and _disk_key(e.efi_path) in named_disks
    }


def build_display_entries(entries: Sequence[BootEntry], config: CustomizationConfig,
                          show_hidden: bool = False) -> List[DisplayEntry]:
    """Turn parsed entries and a reconciled config into render-ready rows."""
    names = custom_names_of(config)
    hidden = config.hidden_set()
    skip = suppressed_duplicates(entries)

    rows: List[DisplayEntry] = []
    for e in apply_custom_order(entries, config.custom_order):
        if e.boot_num in skip:
            continue
        is_hidden = e.boot_num in hidden
        if is_hidden and not show_hidden:
            continue
        rows.append(DisplayEntry(
            entry=e,
            label=names.get(e.boot_num) or e.name,
            icon=boot_entry_icon(e.name),
            hidden=is_hidden,
        ))
    return rows
