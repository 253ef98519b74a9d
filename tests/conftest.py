import pytest
from PySide6.QtCore import QSettings

from efi_switch.settings import CustomizationStore


@pytest.fixture
def store(tmp_path):
    settings = QSettings(str(tmp_path / "efi-switch.ini"), QSettings.Format.IniFormat)
    return CustomizationStore(settings)
