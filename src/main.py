#!/usr/bin/env python3
"""
PrimeSwitch - Main Entry Point
"""

import argparse
import signal
import sys

# PySide6 imports
from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer

# Local imports
from backend.dependency_checker import DependencyChecker
from backend.prime_switch import PrimeSwitch
from models.gpu_model import gpu_label
from utils.logger import setup_logger
import config

logger = setup_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primeswitch",
        description=config.APP_DESCRIPTION
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {config.APP_VERSION}")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("gpu", help="Show the active GPU")
    sub.add_parser("query", help="Show the prime-select profile")
    switch = sub.add_parser("switch", help="Select a GPU profile (takes effect after logout)")
    switch.add_argument("target", choices=config.GPU_TARGETS)
    sub.add_parser("settings", help="Open NVIDIA Settings")
    sub.add_parser("watch", help="Print the active GPU whenever the prime profile changes")
    sub.add_parser("check", help="Check for required helper programs")
    sub.add_parser("gui", help="Run the tray indicator")
    return parser


def _core_app() -> QCoreApplication:
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    QCoreApplication.setApplicationName(config.APP_NAME)
    QCoreApplication.setApplicationVersion(config.APP_VERSION)
    return app


def _quit_on_signals(app):
    """Let Ctrl+C stop the Qt event loop"""
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    signal.signal(signal.SIGTERM, lambda *_: app.quit())

    # Qt blocks the interpreter, wake it so Python signal handlers run
    timer = QTimer(app)
    timer.timeout.connect(lambda: None)
    timer.start(250)
    return timer


def cmd_switch(switch: PrimeSwitch, target: str) -> int:
    if not switch.command('sudo'):
        print("No privilege helper found (pkexec or gksudo)", file=sys.stderr)
        return 1
    if not switch.command('select'):
        print("prime-select not found", file=sys.stderr)
        return 1

    _core_app()
    loop = QEventLoop()
    outcome = {}

    def on_done(result):
        outcome['result'] = result
        loop.quit()

    if not switch.switch(target, on_done):
        print(f"Already using {gpu_label(target)}")
        return 0

    if 'result' not in outcome:
        loop.exec()

    result = outcome.get('result')
    if result is None:
        return 1
    print(result.status_text, file=sys.stdout if result.result else sys.stderr)
    return 0 if result.result else 1


def cmd_settings(switch: PrimeSwitch) -> int:
    if not switch.command('settings'):
        print("nvidia-settings not found", file=sys.stderr)
        return 1

    _core_app()
    handle = switch.settings()
    if handle.done:
        print(handle.result.stderr, file=sys.stderr)
        return 1

    # Wait for the window to be closed so the process is not orphaned
    loop = QEventLoop()
    handle.finished.connect(lambda _: loop.quit())
    loop.exec()
    return 0


def cmd_watch(switch: PrimeSwitch) -> int:
    app = _core_app()
    _timer = _quit_on_signals(app)

    def on_change(gpu):
        print(gpu, flush=True)

    switch.gpu_changed.connect(on_change)
    switch.monitor()
    print(switch.gpu, flush=True)
    try:
        app.exec()
    finally:
        switch.destroy()
    return 0


def cmd_check(switch: PrimeSwitch) -> int:
    checker = DependencyChecker(switch.resolver)
    ok, missing = checker.check_all_dependencies()

    for role in config.HELPER_CANDIDATES:
        path = switch.command(role)
        print(f"{role:<12} {path or 'missing'}")

    if missing:
        print(f"\nInstall missing helpers with:\n{checker.get_install_command(missing)}")
    return 0 if ok else 1


def gui_main() -> int:
    """Tray indicator entry point"""
    from PySide6.QtWidgets import QApplication, QSystemTrayIcon
    from ui.tray_indicator import TrayIndicator

    QCoreApplication.setApplicationName(config.APP_NAME)
    QCoreApplication.setApplicationVersion(config.APP_VERSION)
    QCoreApplication.setOrganizationName(config.APP_AUTHOR)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)
    logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.error("No system tray available")
        return 1

    _timer = _quit_on_signals(app)

    switch = PrimeSwitch()
    indicator = TrayIndicator(switch)
    indicator.show()
    switch.monitor()

    exit_code = app.exec()
    switch.destroy()
    logger.info(f"{config.APP_NAME} exiting with code {exit_code}")
    return exit_code


def main(argv=None) -> int:
    """Main application entry point"""
    args = build_parser().parse_args(argv)

    if args.command in (None, "gui"):
        return gui_main()

    switch = PrimeSwitch()

    if args.command == "gpu":
        print(switch.gpu)
        return 0
    if args.command == "query":
        print(switch.query)
        return 0
    if args.command == "switch":
        return cmd_switch(switch, args.target)
    if args.command == "settings":
        return cmd_settings(switch)
    if args.command == "watch":
        return cmd_watch(switch)
    if args.command == "check":
        return cmd_check(switch)
    return 1


if __name__ == "__main__":
    sys.exit(main())
