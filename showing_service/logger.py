import logging
import os

from showing_service.config import LOG_DIR

logger = logging.getLogger("showing-service")


def setup_logging(log_dir: str = LOG_DIR, level: int = logging.INFO):
    """Настроить логирование сервиса (вызывается при старте приложения)"""
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "showing-service.log")

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler()
        ]
    )
    logger.info(f"Logging to {log_file}")
    return logger
