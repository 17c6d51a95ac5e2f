import threading
from dataclasses import InitVar, dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from showing_service.errors import SeatAlreadyOccupied, SeatNotFound
from showing_service.layouts import generate_layout, is_known_room_type

# Скидка 10% на сумму товаров комбо
COMBO_DISCOUNT_FACTOR = 0.90


@dataclass
class Seat:
    row: str
    number: int
    occupied: bool = False

    @property
    def code(self) -> str:
        return f"{self.row}{self.number}"

    def set_occupied(self, occupied: bool):
        """Перезаписывает статус без проверок (проверка - в Room.reserve)"""
        self.occupied = occupied


@dataclass
class Room:
    name: str
    seats: List[Seat] = field(default_factory=list, init=False)
    _index: Dict[Tuple[str, int], Seat] = field(default_factory=dict, init=False, repr=False, compare=False)
    lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.configure_seats()

    def configure_seats(self):
        """Пересоздает места по схеме зала; повторный вызов не дублирует места"""
        with self.lock:
            self.seats.clear()
            self._index.clear()
            for row, number in generate_layout(self.name):
                seat = Seat(row=row, number=number)
                self.seats.append(seat)
                self._index[(row, number)] = seat

    @property
    def recognized(self) -> bool:
        return is_known_room_type(self.name)

    @property
    def capacity(self) -> int:
        return len(self.seats)

    @property
    def occupied_count(self) -> int:
        return sum(1 for seat in self.seats if seat.occupied)

    @property
    def available_count(self) -> int:
        return self.capacity - self.occupied_count

    def list_seats(self) -> List[Seat]:
        return list(self.seats)

    def find_seat(self, row: str, number: int) -> Optional[Seat]:
        return self._index.get((row.upper(), number))

    def _require_seat(self, row: str, number: int) -> Seat:
        seat = self.find_seat(row, number)
        if seat is None:
            raise SeatNotFound(row, number, self.name)
        return seat

    def reserve(self, row: str, number: int) -> Seat:
        """Занять место, только если оно свободно"""
        with self.lock:
            seat = self._require_seat(row, number)
            if seat.occupied:
                raise SeatAlreadyOccupied(seat.row, seat.number)
            seat.set_occupied(True)
            return seat

    def release(self, row: str, number: int) -> Seat:
        with self.lock:
            seat = self._require_seat(row, number)
            seat.set_occupied(False)
            return seat

    def set_seat_occupied(self, row: str, number: int, occupied: bool) -> Seat:
        with self.lock:
            seat = self._require_seat(row, number)
            seat.set_occupied(occupied)
            return seat

    def __str__(self):
        return f"{self.name} (capacity: {self.capacity})"


@dataclass
class Film:
    title: str
    genre: str
    synopsis: str
    duration_minutes: int

    @property
    def duration_display(self) -> str:
        hours, minutes = divmod(self.duration_minutes, 60)
        return f"{hours:02d}:{minutes:02d}"


def build_showing_id(title: str, start_time: datetime, room_name: str) -> str:
    """
    ID сеанса: ИНИЦИАЛЫ:ГГГГММДД:ЧЧММ:ЗАЛ

    Инициалы - первые буквы непустых слов названия (разделитель - пробел),
    из названия зала удаляются пробелы.
    """
    initials = "".join(word[0] for word in title.split(" ") if word).upper()
    return ":".join([
        initials,
        start_time.strftime("%Y%m%d"),
        start_time.strftime("%H%M"),
        room_name.replace(" ", ""),
    ])


@dataclass(eq=False)
class Showing:
    """
    Сеанс: фильм в конкретном зале в конкретное время.

    У каждого сеанса свой экземпляр Room, поэтому занятость мест одного
    сеанса не влияет на другие. ID вычисляется один раз при создании и не
    меняется при изменении start_time: чтобы перенести сеанс, его нужно
    удалить и создать заново.
    """
    film: Film
    room_type: InitVar[str]
    start_time: datetime
    room: Room = field(init=False, repr=False)
    showing_id: str = field(init=False)

    def __post_init__(self, room_type: str):
        self.room = Room(room_type)
        start_time = self.start_time
        if start_time.tzinfo is not None:
            # все сеансы хранятся в наивном локальном времени кинотеатра
            start_time = start_time.astimezone().replace(tzinfo=None)
        self.start_time = start_time.replace(second=0, microsecond=0)
        self.showing_id = build_showing_id(self.film.title, self.start_time, self.room.name)

    @property
    def room_name(self) -> str:
        return self.room.name

    @property
    def end_time(self) -> datetime:
        return self.start_time + timedelta(minutes=self.film.duration_minutes)

    def interval(self) -> Tuple[datetime, datetime]:
        return self.start_time, self.end_time


@dataclass(frozen=True)
class Product:
    name: str
    price: float

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"Product price must be non-negative, got {self.price}")


@dataclass
class Combo:
    name: str
    products: List[Product] = field(default_factory=list)

    def add_product(self, product: Product):
        self.products.append(product)

    def total_price(self) -> float:
        """Сумма цен товаров со скидкой; пересчитывается при каждом вызове"""
        return sum(product.price for product in self.products) * COMBO_DISCOUNT_FACTOR

    def __str__(self):
        return f"{self.name} ({len(self.products)} products) - {self.total_price():.2f}"
