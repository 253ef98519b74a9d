"""Tests for the efibootmgr backend."""
import subprocess

import pytest

from efi_switch.platforms import common
from efi_switch.platforms.linux import LinuxBootManager, parse_efibootmgr


LISTING = (
    "BootCurrent: 0001\n"
    "BootNext: 0003\n"
    "Timeout: 1 seconds\n"
    "BootOrder: 0001,0000,0003\n"
    "Boot0000* Windows Boot Manager\tHD(1,GPT,aaaa,0x800,0x32000)/File(\\EFI\\Microsoft\\Boot\\bootmgfw.efi)\n"
    "Boot0001* UEFI: ubuntu\tHD(1,GPT,aaaa,0x800,0x32000)/File(\\EFI\\ubuntu\\shimx64.efi)\n"
    "Boot0003  UEFI Shell\n"
)


def _completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestParseEfibootmgr:
    def test_entries(self):
        entries = parse_efibootmgr(LISTING)
        assert [e.boot_num for e in entries] == ["0000", "0001", "0003"]
        assert entries[1].name == "ubuntu"
        assert entries[1].efi_path.startswith("HD(1,GPT,aaaa")
        assert entries[2].efi_path == ""

    def test_flags(self):
        entries = parse_efibootmgr(LISTING)
        assert [e.active for e in entries] == [True, True, False]
        assert [e.is_current for e in entries] == [False, True, False]
        assert [e.is_next for e in entries] == [False, False, True]

    def test_header_lines_ignored(self):
        assert parse_efibootmgr("BootCurrent: 0001\nBootOrder: 0001\n") == []


@pytest.fixture
def manager(monkeypatch):
    monkeypatch.setattr(common, "which", lambda cmd: "/usr/bin/" + cmd)
    return LinuxBootManager()


class TestLinuxBootManager:
    def test_unavailable(self, monkeypatch):
        monkeypatch.setattr(common, "which", lambda cmd: None)
        mgr = LinuxBootManager()
        assert not mgr.available()
        assert mgr.list_entries() == []

    def test_list_entries(self, manager, monkeypatch):
        monkeypatch.setattr(common, "run", lambda cmd, **kw: _completed(LISTING))
        assert len(manager.list_entries()) == 3

    def test_list_entries_failure(self, manager, monkeypatch):
        monkeypatch.setattr(common, "run", lambda cmd, **kw: _completed(returncode=2, stderr="EFI variables are not supported"))
        assert manager.list_entries() == []

    def test_set_next_requires_root(self, manager, monkeypatch):
        monkeypatch.setattr(common, "is_admin", lambda: False)
        ok, msg = manager.set_next("0001")
        assert not ok
        assert "Root" in msg

    def test_set_next(self, manager, monkeypatch):
        calls = []
        monkeypatch.setattr(common, "is_admin", lambda: True)
        monkeypatch.setattr(common, "run", lambda cmd, **kw: calls.append(cmd) or _completed())
        ok, msg = manager.set_next("0003")
        assert ok
        assert calls == [["/usr/bin/efibootmgr", "-n", "0003"]]

    def test_set_next_failure(self, manager, monkeypatch):
        monkeypatch.setattr(common, "is_admin", lambda: True)
        monkeypatch.setattr(common, "run", lambda cmd, **kw: _completed(returncode=1, stderr="Could not set BootNext"))
        assert manager.set_next("0009") == (False, "Could not set BootNext")
