from __future__ import annotations
import logging
from typing import Iterable, Optional

from PySide6.QtCore import QSettings

from .customization import EMPTY_NAMES, cleanup_config
from .models import CustomizationConfig

logger = logging.getLogger(__name__)

ORGANIZATION = 'efi-switch'
APPLICATION = 'efi-switch'

KEY_ORDER = 'customOrder'
KEY_HIDDEN = 'hiddenEntries'
KEY_NAMES = 'customNames'


class CustomizationStore:
    """Reads and writes the user's ordering, hidden entries and renames."""

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        self.settings = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)

    def _read(self, key: str, default: str) -> str:
        value = self.settings.value(key, default)
        # an empty ini value can come back as None or an empty list
        if not value:
            return default
        return str(value)

    def load(self) -> CustomizationConfig:
        return CustomizationConfig(
            custom_order=self._read(KEY_ORDER, ''),
            hidden_entries=self._read(KEY_HIDDEN, ''),
            custom_names=self._read(KEY_NAMES, EMPTY_NAMES),
        )

    def save(self, config: CustomizationConfig) -> None:
        self.settings.setValue(KEY_ORDER, config.custom_order)
        self.settings.setValue(KEY_HIDDEN, config.hidden_entries)
        self.settings.setValue(KEY_NAMES, config.custom_names)
        self.settings.sync()

    def reconcile(self, valid_boot_nums: Iterable[str]) -> CustomizationConfig:
        """Load the stored config, drop stale boot numbers and persist the result."""
        stored = self.load()
        result = cleanup_config(valid_boot_nums, stored.custom_order,
                                stored.hidden_entries, stored.custom_names)
        if result.changed:
            logger.info('Removed stale boot entries from saved customization')
            self.save(result.config)
        return result.config
