"""Logging configuration."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_dir: Optional[str] = None, level: Union[int, str] = logging.INFO) -> None:
    """
    Set up logging configuration.

    Args:
        log_dir: Directory to store log files; console only when empty
        level: Logging level
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    log_file = None
    if log_dir:
        # Create log filename with timestamp
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"publications_{timestamp}.log"
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.info("Logging initialized")
    if log_file:
        logging.info(f"Log file: {log_file}")
