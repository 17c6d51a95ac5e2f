import json
from datetime import datetime
from pathlib import Path

from showing_service.config import ACTIONS_LOG_FILE
from showing_service.logger import logger

LOG_FILE = Path(ACTIONS_LOG_FILE)


def log_action(action: str, user_id: str, details: dict = None, ip: str = None, log_file: Path = None):
    """Логирует действия пользователей в файл (одна JSON-строка на действие)"""
    log_file = Path(log_file or LOG_FILE)
    log_entry = {
        "timestamp": datetime.now().isoformat(),
        "action": action,
        "user_id": user_id,
        "ip": ip,
        "details": details or {}
    }

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
    except OSError as e:
        logger.error(f"Failed to write action log: {e}")


def get_logs(limit: int = 100, log_file: Path = None) -> list:
    """Возвращает последние логи"""
    log_file = Path(log_file or LOG_FILE)
    if not log_file.exists():
        return []

    with open(log_file, "r", encoding="utf-8") as f:
        lines = f.readlines()

    logs = []
    for line in lines[-limit:]:
        try:
            logs.append(json.loads(line))
        except json.JSONDecodeError:
            logger.warning(f"Skipping malformed action log line: {line.strip()}")

    return logs


def clear_logs(log_file: Path = None) -> bool:
    log_file = Path(log_file or LOG_FILE)
    if log_file.exists():
        log_file.unlink()
        logger.info("User action logs cleared")
        return True
    return False
