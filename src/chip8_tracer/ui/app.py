# src/chip8_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
コマンドライン引数を解釈し、ロギングと設定を初期化してメインウィンドウを起動します。
"""
import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from .main_window import MainWindow

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 virtual machine with an instruction tracer.")
    parser.add_argument("rom", nargs="?", help="ROM image to load at startup")
    parser.add_argument("-c", "--config", help="YAML system configuration file")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (default: WARNING)")
    return parser

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config=config)
    if args.rom:
        main_win.load_rom(args.rom)
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
