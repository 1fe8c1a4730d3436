"""
Main entry point for the Turtle Logo IDE application.
Initializes the Qt application, sets up the main window, and starts the event loop.
"""

import sys
import logging
from PySide6.QtWidgets import QApplication
from config.turtle_config import ConfigManager
from gui.main_window import MainWindow

def main():
    """Initializes and runs the PySide6 application.

    An optional first argument names a preset (default, fast, presentation)
    or a JSON config file.
    """
    app = QApplication(sys.argv)

    arg = sys.argv[1] if len(sys.argv) > 1 else "default"
    if arg.endswith('.json'):
        config = ConfigManager.load_config(arg)
    else:
        config = ConfigManager.get_config(arg)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    window = MainWindow(config)
    window.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
