import sys
import logging

from PySide6.QtWidgets import QApplication

# Prefer absolute imports (work with PyInstaller); fallback to relative for editors
try:
    from efi_switch.gui.app import BootSwitchApp
    from efi_switch.cli import build_parser, run_cli
except ImportError:  # pragma: no cover
    from .gui.app import BootSwitchApp
    from .cli import build_parser, run_cli


def main():
    parser = build_parser()
    args, unknown = parser.parse_known_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    if getattr(args, 'cli', False) or args.cmd:
        code = run_cli(args)
        sys.exit(code)

    app = QApplication(sys.argv)
    app.setOrganizationName('efi-switch')
    app.setApplicationName('efi-switch')
    w = BootSwitchApp()
    w.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
