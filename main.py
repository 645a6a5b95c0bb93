#!/usr/bin/env python3
"""
Shape Canvas - Main Entry Point

An interactive 2D vector-shape editor: add rectangles, circles, ellipses
and polygons, then select, move, resize and duplicate them on a
pannable, zoomable canvas.

Usage:
    python main.py
    python main.py --debug                 # Enable debug logging
    python main.py --config settings.json  # Use a specific settings file
"""

import sys
import logging
import argparse
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

from services import get_settings
from views import MainWindow


def setup_logging(debug: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if debug else logging.INFO

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Log startup message
    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized at {'DEBUG' if debug else 'INFO'} level")


def setup_application() -> QApplication:
    """Configure the Qt application."""
    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Shape Canvas")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("shape-canvas")

    return app


def main():
    """Main entry point."""
    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Shape Canvas vector-shape editor')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', metavar='PATH', help='Settings file to use')
    args = parser.parse_args()

    # Setup logging
    setup_logging(debug=args.debug)

    app = setup_application()

    # Create and show main window
    window = MainWindow(get_settings(args.config))
    window.show()

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
