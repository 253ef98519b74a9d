from __future__ import annotations
import argparse
import json
import logging
from typing import List

from .customization import with_custom_name
from .display import build_display_entries
from .platforms.linux import LinuxBootManager
from .settings import CustomizationStore
from .models import DisplayEntry

logger = logging.getLogger(__name__)


def get_manager() -> LinuxBootManager:
    return LinuxBootManager()


def format_entries(rows: List[DisplayEntry], output: str) -> str:
    if output == 'json':
        return json.dumps([
            {
                'boot_num': r.entry.boot_num,
                'name': r.label,
                'firmware_name': r.entry.name,
                'efi_path': r.entry.efi_path,
                'icon': r.icon,
                'active': r.entry.active,
                'is_current': r.entry.is_current,
                'is_next': r.entry.is_next,
                'hidden': r.hidden,
            } for r in rows
        ], ensure_ascii=False, indent=2)
    # default: table-like text
    lines = ["BOOTNUM\tCURRENT\tNEXT\tHIDDEN\tNAME\tPATH"]
    for r in rows:
        e = r.entry
        lines.append(f"{e.boot_num}\t{int(e.is_current)}\t{int(e.is_next)}\t{int(r.hidden)}\t{r.label}\t{e.efi_path}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='efi-switch', description='List, customize and pick the next UEFI boot entry')
    sub = p.add_subparsers(dest='cmd', required=False)

    p.add_argument('--cli', action='store_true', help='Run in CLI mode (no GUI)')
    p.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    list_p = sub.add_parser('list', help='List boot entries in display order')
    list_p.add_argument('-o', '--output', choices=['text', 'json'], default='text')
    list_p.add_argument('-a', '--all', action='store_true', help='Include hidden entries')

    set_p = sub.add_parser('set', help='Set next boot entry (one-time)')
    set_p.add_argument('id', help='Boot number, e.g. 0001')

    sub.add_parser('reboot', help='Reboot immediately')

    hide_p = sub.add_parser('hide', help='Hide a boot entry from the listing')
    hide_p.add_argument('id')
    unhide_p = sub.add_parser('unhide', help='Show a hidden boot entry again')
    unhide_p.add_argument('id')

    rename_p = sub.add_parser('rename', help='Set a display name (omit LABEL to restore the firmware name)')
    rename_p.add_argument('id')
    rename_p.add_argument('label', nargs='?', default='')

    order_p = sub.add_parser('order', help='Set display order (no IDs restores firmware order)')
    order_p.add_argument('ids', nargs='*')

    return p


def _edit_config(store: CustomizationStore, valid: List[str], args: argparse.Namespace) -> tuple[bool, str]:
    if args.cmd != 'order' and args.id not in valid:
        return False, f'Unknown boot entry: {args.id}'
    config = store.reconcile(valid)
    if args.cmd == 'hide':
        config = config.with_hidden(args.id, True)
        msg = f'Hidden {args.id}'
    elif args.cmd == 'unhide':
        config = config.with_hidden(args.id, False)
        msg = f'Unhidden {args.id}'
    elif args.cmd == 'rename':
        config = with_custom_name(config, args.id, args.label)
        msg = f'Renamed {args.id}' if args.label.strip() else f'Restored firmware name of {args.id}'
    else:
        unknown = [n for n in args.ids if n not in valid]
        if unknown:
            return False, 'Unknown boot entries: ' + ','.join(unknown)
        config = config.with_order(args.ids)
        msg = 'Display order set' if args.ids else 'Display order reset'
    store.save(config)
    return True, msg


def run_cli(args: argparse.Namespace, store: CustomizationStore | None = None) -> int:
    mgr = get_manager()
    if not mgr.available():
        print('efibootmgr not found. Install it or run on a UEFI Linux system.')
        return 2
    if args.cmd == 'set':
        ok, msg = mgr.set_next(args.id)
        print(msg)
        return 0 if ok else 1
    if args.cmd == 'reboot':
        ok, msg = mgr.reboot_now()
        print(msg)
        return 0 if ok else 1

    store = store if store is not None else CustomizationStore()
    entries = mgr.list_entries()
    valid = [e.boot_num for e in entries]
    if args.cmd in ('hide', 'unhide', 'rename', 'order'):
        ok, msg = _edit_config(store, valid, args)
        print(msg)
        return 0 if ok else 1

    config = store.reconcile(valid)
    rows = build_display_entries(entries, config, show_hidden=getattr(args, 'all', False))
    print(format_entries(rows, getattr(args, 'output', 'text')))
    return 0
