from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Set


@dataclass(frozen=True)
class BootEntry:
    boot_num: str  # '0000' style, as assigned by firmware
    name: str
    efi_path: str = ''  # device path, may be empty
    active: bool = True
    is_current: bool = False
    is_next: bool = False


@dataclass(frozen=True)
class EntryName:
    name: str
    efi_path: str = ''


@dataclass(frozen=True)
class CustomizationConfig:
    """User customization persisted across sessions.

    All three fields are stored as strings: ``custom_order`` and
    ``hidden_entries`` are comma-separated boot numbers, ``custom_names`` is a
    JSON object mapping boot number to label.
    """
    custom_order: str = ''
    hidden_entries: str = ''
    custom_names: str = '{}'

    def hidden_set(self) -> Set[str]:
        return {n.strip() for n in self.hidden_entries.split(',') if n.strip()}

    def with_hidden(self, boot_num: str, hidden: bool) -> CustomizationConfig:
        current = [n.strip() for n in self.hidden_entries.split(',') if n.strip()]
        if hidden and boot_num not in current:
            current.append(boot_num)
        elif not hidden:
            current = [n for n in current if n != boot_num]
        return replace(self, hidden_entries=','.join(current))

    def with_order(self, boot_nums: List[str]) -> CustomizationConfig:
        return replace(self, custom_order=','.join(boot_nums))


@dataclass(frozen=True)
class CleanupResult:
    custom_order: str
    hidden_entries: str
    custom_names: str
    changed: bool

    @property
    def config(self) -> CustomizationConfig:
        return CustomizationConfig(
            custom_order=self.custom_order,
            hidden_entries=self.hidden_entries,
            custom_names=self.custom_names,
        )


@dataclass(frozen=True)
class DisplayEntry:
    entry: BootEntry
    label: str
    icon: str
    hidden: bool = False
