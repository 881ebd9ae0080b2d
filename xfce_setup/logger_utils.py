# Gentoo-Xfce-Setup/xfce_setup/logger_utils.py
import logging
import sys
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOG_FILE_PATH = PROJECT_ROOT / "gentoo_xfce_setup.log"
LOGGER_NAME = "GentooXfceSetup"


def setup_logger(log_file_path: Optional[Path] = None, log_level: int = logging.INFO) -> logging.Logger:
    """
    Configures the application logger to write to log_file_path (LOG_FILE_PATH by default).
    User-facing output goes through console_output, not through this logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    log_file_path = log_file_path or LOG_FILE_PATH
    try:
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, mode='a', encoding='utf-8')
    except OSError as e:
        # console_output is not usable here without an import cycle
        sys.stderr.write(f"ERROR [logger_utils]: Could not open log file {log_file_path}. File logging disabled. Error: {e}\n")
        logger.addHandler(logging.NullHandler())
        return logger

    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
    ))
    logger.addHandler(file_handler)
    logger.info(f"File logging initialized to: {log_file_path}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the application logger, e.g. GentooXfceSetup.provisioner."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


app_logger = setup_logger()
