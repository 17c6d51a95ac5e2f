import os

# Файловое хранилище
DATA_DIR = os.getenv("SHOWING_DATA_DIR", "data")
CATALOGUE_FILE = os.path.join(DATA_DIR, "catalogue.json")

# Логи
LOG_DIR = os.getenv("SHOWING_LOG_DIR", "logs")
ACTIONS_LOG_FILE = os.path.join(LOG_DIR, "user_actions.log")

# Сохранять каталог на диск после каждого изменения
PERSIST = os.getenv("SHOWING_PERSIST", "0") == "1"

SHOWING_SERVICE_URL = os.getenv("SHOWING_SERVICE_URL", "http://showing-service:8000")
CLIENT_TIMEOUT = float(os.getenv("SHOWING_CLIENT_TIMEOUT", "3"))
