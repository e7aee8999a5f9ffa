import sys
import os
import logging
from pathlib import Path
from PySide6.QtGui import QGuiApplication
from PySide6.QtQml import QQmlApplicationEngine
from memory_config import ConfigurationError, DesktopConfiguration
from desktop_ui.coordinator import GameCoordinator

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"

logger = logging.getLogger(__name__)


def main() -> int:
    # Set Qt Quick Controls style to Basic to allow background customization
    os.environ["QT_QUICK_CONTROLS_STYLE"] = "Basic"

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    config = DesktopConfiguration()
    try:
        config.validate()
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    logging.getLogger().setLevel(config.log_level.upper())
    logger.debug("Configuration: %s", config.as_dict())

    app = QGuiApplication(sys.argv)
    app.setApplicationName(config.window_title)
    engine = QQmlApplicationEngine()

    coordinator = GameCoordinator(config)

    engine.rootContext().setContextProperty("cardModel", coordinator.card_model)
    engine.rootContext().setContextProperty("game", coordinator)

    qml_file = Path(__file__).parent / "qml" / "MainWindow.qml"
    engine.load(str(qml_file))

    if not engine.rootObjects():
        logger.error("Failed to load QML from %s", qml_file)
        coordinator.cleanup()
        return 1

    try:
        return app.exec()
    finally:
        coordinator.cleanup()
