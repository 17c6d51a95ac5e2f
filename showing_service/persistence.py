"""
Сохранение каталога в JSON-файл и загрузка из него.

Каталог работает только с объектами в памяти; этот модуль - внешний
слой хранения. Директория данных создаётся явным вызовом ensure_data_dir()
при старте приложения.

Снимок снимается под блокировками каталога и залов, запись идёт во
временный файл с последующей атомарной заменой. Загрузка сначала
собирает новый каталог целиком и только потом подменяет содержимое
текущего: при ошибке текущий каталог не меняется.

Сохранённые сеансы при загрузке проходят ту же проверку пересечений, что
и новые. Сеанс, который пересекается с уже загруженным (например, после
переноса start_time на месте или после пересоздания фильма с другой
длительностью), пропускается с записью ERROR в лог.
"""
import json
import os
import tempfile
import threading
from datetime import datetime

from showing_service.config import CATALOGUE_FILE, DATA_DIR
from showing_service.errors import ScheduleConflict
from showing_service.logger import logger
from showing_service.models import Showing
from showing_service.storage import ShowingCatalogue

_save_lock = threading.Lock()


def ensure_data_dir(data_dir: str = DATA_DIR):
    """Создать директорию для данных если не существует"""
    os.makedirs(data_dir, exist_ok=True)


def _dump_showing(showing: Showing) -> dict:
    with showing.room.lock:
        occupied = [
            {"row": seat.row, "number": seat.number}
            for seat in showing.room.seats if seat.occupied
        ]
    return {
        "showing_id": showing.showing_id,
        "film_title": showing.film.title,
        "room_name": showing.room_name,
        "start_time": showing.start_time.isoformat(),
        "occupied": occupied
    }


def dump_catalogue(catalogue: ShowingCatalogue) -> dict:
    snapshot = catalogue.snapshot()
    return {
        "films": [
            {
                "title": film.title,
                "genre": film.genre,
                "synopsis": film.synopsis,
                "duration_minutes": film.duration_minutes
            }
            for film in snapshot["films"]
        ],
        "showings": [
            _dump_showing(showing)
            for showing in sorted(snapshot["showings"], key=lambda s: s.start_time)
        ],
        "products": [
            {"name": product.name, "price": product.price}
            for product in snapshot["products"]
        ],
        "combos": [
            {"name": name, "products": [p.name for p in products]}
            for name, products in snapshot["combos"]
        ]
    }


def save_catalogue(catalogue: ShowingCatalogue, path: str = CATALOGUE_FILE):
    """Сохранить каталог в файл"""
    data = dump_catalogue(catalogue)
    directory = os.path.dirname(path) or "."
    ensure_data_dir(directory)

    with _save_lock:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".catalogue-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    logger.info(f"Catalogue saved to {path}")


def build_catalogue(data: dict) -> ShowingCatalogue:
    """Собрать новый каталог из сохранённых данных"""
    catalogue = ShowingCatalogue()

    for film_data in data.get("films", []):
        catalogue.create_film(**film_data)

    for product_data in data.get("products", []):
        catalogue.add_product(product_data["name"], product_data["price"])

    for combo_data in data.get("combos", []):
        catalogue.create_combo(combo_data["name"], combo_data["products"])

    for showing_data in data.get("showings", []):
        film = catalogue.get_film(showing_data["film_title"])
        if film is None:
            logger.error(f"Film '{showing_data['film_title']}' missing, skipping showing {showing_data['showing_id']}")
            continue

        showing = Showing(film, showing_data["room_name"], datetime.fromisoformat(showing_data["start_time"]))
        # ID хранится как есть: после переноса времени он может не совпадать со start_time
        showing.showing_id = showing_data["showing_id"]
        for seat in showing_data.get("occupied", []):
            showing.room.set_seat_occupied(seat["row"], seat["number"], True)

        try:
            catalogue.admit_showing(showing)
        except ScheduleConflict as e:
            logger.error(f"Skipping stored showing: {e}")

    return catalogue


def restore_catalogue(catalogue: ShowingCatalogue, data: dict):
    catalogue.replace_contents(build_catalogue(data))


def load_catalogue(catalogue: ShowingCatalogue, path: str = CATALOGUE_FILE) -> bool:
    """Загрузить каталог из файла"""
    if not os.path.exists(path):
        logger.info("Catalogue file not found, starting empty")
        return False

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        restore_catalogue(catalogue, data)
    except (OSError, ValueError, LookupError, TypeError) as e:
        logger.error(f"Error loading catalogue: {e}")
        return False

    logger.info(f"Loaded {len(catalogue.showings)} showings from {path}")
    return True
