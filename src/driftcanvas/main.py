"""
Application Initialization
==========================
This module wires the model, controller and view together and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging and reads the configuration.
2. Instantiates the canvas controller (which owns the item state).
3. Instantiates the Main Window (View), passing the controller in.
"""
import logging
import sys

from driftcanvas.app.application import create_app
from driftcanvas.config import CanvasConfig
from driftcanvas.controller.canvas import CanvasController
from driftcanvas.logging_config import setup_logging
from driftcanvas.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (level and optional file come from the environment)
    setup_logging()

    # 2. Create the Qt Application (QSettings must be configured before use)
    app = create_app()

    # 3. Configuration + controller
    config = CanvasConfig.from_env()
    controller = CanvasController(config)

    # 4. Main Window
    window = MainWindow(controller)
    window.show()
    logger.info("Canvas window shown.")

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
