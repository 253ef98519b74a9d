"""Tests for persisted customization."""
from PySide6.QtCore import QSettings

from efi_switch.models import CustomizationConfig
from efi_switch.settings import CustomizationStore, KEY_ORDER


class TestCustomizationStore:
    def test_defaults(self, store):
        assert store.load() == CustomizationConfig()

    def test_save_and_load(self, store):
        config = CustomizationConfig("0002,0001", "0003", '{"0001":"Work"}')
        store.save(config)
        assert store.load() == config

    def test_persists_across_instances(self, store, tmp_path):
        config = CustomizationConfig("0002,0001", "0003", '{"0001":"Work, home"}')
        store.save(config)
        reopened = CustomizationStore(QSettings(str(tmp_path / "efi-switch.ini"), QSettings.Format.IniFormat))
        assert reopened.load() == config

    def test_reconcile_writes_back_changes(self, store):
        store.save(CustomizationConfig("0009,0001", "0009", '{"0009":"Gone"}'))
        cleaned = store.reconcile(["0001", "0002"])
        assert cleaned == CustomizationConfig("0001", "", "{}")
        assert store.load() == cleaned

    def test_reconcile_leaves_clean_config(self, store):
        store.settings.setValue(KEY_ORDER, "0002,0001")
        assert store.reconcile(["0001", "0002"]).custom_order == "0002,0001"
