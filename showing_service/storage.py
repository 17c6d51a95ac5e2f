import threading
from datetime import datetime
from typing import Dict, List, Optional

from showing_service.errors import (
    ComboNotFound,
    ProductNotFound,
    ScheduleConflict,
    SeatNotFound,
    ShowingNotFound,
)
from showing_service.logger import logger
from showing_service.models import Combo, Film, Product, Seat, Showing
from showing_service.scheduling import check_schedule


class ShowingCatalogue:
    """
    Хранилище фильмов, сеансов, товаров и комбо в памяти.

    Планирование сеанса выполняется под блокировкой зала: два параллельных
    запроса на пересекающееся время в одном зале не могут пройти оба.
    Изменения мест сериализуются блокировкой самого Room сеанса.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._room_locks: Dict[str, threading.Lock] = {}
        self.films: Dict[str, Film] = {}
        self.showings: Dict[str, Showing] = {}
        self.products: Dict[str, Product] = {}
        self.combos: Dict[str, Combo] = {}

    def clear(self):
        with self._lock:
            self.films.clear()
            self.showings.clear()
            self.products.clear()
            self.combos.clear()

    def snapshot(self) -> dict:
        """Копии коллекций каталога, снятые под блокировкой"""
        with self._lock:
            return {
                "films": list(self.films.values()),
                "showings": list(self.showings.values()),
                "products": list(self.products.values()),
                "combos": [(combo.name, list(combo.products)) for combo in self.combos.values()],
            }

    def replace_contents(self, other: "ShowingCatalogue"):
        """Заменить содержимое каталога содержимым other целиком"""
        with self._lock:
            self.films = dict(other.films)
            self.showings = dict(other.showings)
            self.products = dict(other.products)
            self.combos = dict(other.combos)

    def _room_lock(self, room_name: str) -> threading.Lock:
        with self._lock:
            lock = self._room_locks.get(room_name)
            if lock is None:
                lock = self._room_locks[room_name] = threading.Lock()
            return lock

    # Фильмы

    def create_film(self, title: str, genre: str, synopsis: str, duration_minutes: int) -> Film:
        film = Film(title=title, genre=genre, synopsis=synopsis, duration_minutes=duration_minutes)
        with self._lock:
            self.films[title] = film
        logger.info(f"Film created: {title} ({film.duration_display})")
        return film

    def get_film(self, title: str) -> Optional[Film]:
        return self.films.get(title)

    def list_films(self) -> List[Film]:
        with self._lock:
            return list(self.films.values())

    # Сеансы

    def schedule_showing(self, film: Film, room_type: str, start_time: datetime) -> Showing:
        """Создать сеанс и добавить его в каталог, если зал свободен"""
        with self._room_lock(room_type):
            candidate = Showing(film, room_type, start_time)
            try:
                self._admit(candidate)
            except ScheduleConflict as e:
                logger.warning(f"Schedule conflict: {e}")
                raise

        logger.info(f"Showing scheduled: {candidate.showing_id}")
        return candidate

    def admit_showing(self, showing: Showing):
        """Добавить уже созданный сеанс (например, при загрузке с диска) с той же проверкой"""
        with self._room_lock(showing.room_name):
            self._admit(showing)

    def _admit(self, showing: Showing):
        # вызывается под блокировкой зала
        duplicate = self.showings.get(showing.showing_id)
        if duplicate is not None:
            raise ScheduleConflict(showing, duplicate)
        check_schedule(self.list_showings(room_name=showing.room_name), showing)
        with self._lock:
            self.showings[showing.showing_id] = showing

    def get_showing(self, showing_id: str) -> Showing:
        showing = self.showings.get(showing_id)
        if showing is None:
            raise ShowingNotFound(showing_id)
        return showing

    def list_showings(self, room_name: str = None) -> List[Showing]:
        with self._lock:
            showings = list(self.showings.values())
        if room_name is not None:
            showings = [s for s in showings if s.room_name == room_name]
        return sorted(showings, key=lambda s: s.start_time)

    def remove_showing(self, showing_id: str) -> Showing:
        showing = self.get_showing(showing_id)
        with self._room_lock(showing.room_name):
            with self._lock:
                removed = self.showings.pop(showing_id, None)
        if removed is None:
            raise ShowingNotFound(showing_id)
        logger.info(f"Showing {showing_id} removed")
        return removed

    # Места

    def find_seat(self, showing: Showing, row: str, number: int) -> Seat:
        seat = showing.room.find_seat(row, number)
        if seat is None:
            raise SeatNotFound(row, number, showing.room_name)
        return seat

    def set_seat_occupied(self, showing: Showing, row: str, number: int, occupied: bool) -> Seat:
        seat = showing.room.set_seat_occupied(row, number, occupied)
        logger.info(f"Seat {seat.code} of {showing.showing_id} set occupied={occupied}")
        return seat

    def reserve_seat(self, showing: Showing, row: str, number: int) -> Seat:
        seat = showing.room.reserve(row, number)
        logger.info(f"Seat {seat.code} of {showing.showing_id} reserved")
        return seat

    def release_seat(self, showing: Showing, row: str, number: int) -> Seat:
        seat = showing.room.release(row, number)
        logger.info(f"Seat {seat.code} of {showing.showing_id} released")
        return seat

    # Товары и комбо

    def add_product(self, name: str, price: float) -> Product:
        product = Product(name=name, price=price)
        with self._lock:
            self.products[name] = product
        return product

    def get_product(self, name: str) -> Product:
        product = self.products.get(name)
        if product is None:
            raise ProductNotFound(name)
        return product

    def create_combo(self, name: str, product_names: List[str] = ()) -> Combo:
        combo = Combo(name=name)
        for product_name in product_names:
            combo.add_product(self.get_product(product_name))
        with self._lock:
            self.combos[name] = combo
        logger.info(f"Combo created: {combo}")
        return combo

    def get_combo(self, name: str) -> Combo:
        combo = self.combos.get(name)
        if combo is None:
            raise ComboNotFound(name)
        return combo

    def add_product_to_combo(self, combo_name: str, product_name: str) -> Combo:
        combo = self.get_combo(combo_name)
        product = self.get_product(product_name)
        with self._lock:
            combo.add_product(product)
        return combo

    def combo_total(self, combo: Combo) -> float:
        return combo.total_price()


catalogue = ShowingCatalogue()
