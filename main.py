import sys
import logging
import argparse
import faulthandler
from PyQt6.QtWidgets import QApplication
from settings import Defaults
from main_window import Main

faulthandler.enable()


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def main():
    parser = argparse.ArgumentParser(description='Figure editor')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args, qt_args = parser.parse_known_args()

    setup_logging(debug=args.debug)

    app = QApplication(sys.argv[:1] + qt_args)
    app.setOrganizationName(Defaults.ORGANIZATION)
    app.setApplicationName(Defaults.APPLICATION)

    window = Main()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
