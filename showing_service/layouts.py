"""
Схемы залов: тип зала -> список сегментов (первая строка, последняя строка, мест в ряду).

Зал строится по таблице одной функцией; неизвестный тип даёт пустой зал
и предупреждение UnrecognizedRoomType, но не ошибку.
"""
import warnings
from typing import Dict, List, Tuple

from showing_service.errors import UnrecognizedRoomType
from showing_service.logger import logger

Segment = Tuple[str, str, int]

ROOM_LAYOUTS: Dict[str, List[Segment]] = {
    "Sala A": [("A", "J", 15)],
    "Sala B": [
        ("A", "D", 7),   # передняя часть
        ("E", "J", 15),  # задняя часть
    ],
    "Sala VIP": [("A", "H", 6)],  # широкие кресла
}


def room_types() -> List[str]:
    return list(ROOM_LAYOUTS)


def is_known_room_type(room_type: str) -> bool:
    return room_type in ROOM_LAYOUTS


def layout_capacity(room_type: str) -> int:
    """Количество мест в зале по таблице (0 для неизвестного типа)"""
    segments = ROOM_LAYOUTS.get(room_type, [])
    return sum(
        (ord(last) - ord(first) + 1) * seats_per_row
        for first, last, seats_per_row in segments
    )


def generate_layout(room_type: str) -> List[Tuple[str, int]]:
    """Создает координаты мест зала: ряды по возрастанию кода символа, места 1..N"""
    segments = ROOM_LAYOUTS.get(room_type)
    if segments is None:
        logger.warning(f"Unrecognized room type '{room_type}', creating empty room")
        warnings.warn(UnrecognizedRoomType(room_type), stacklevel=2)
        return []

    positions = []
    for first, last, seats_per_row in segments:
        for code in range(ord(first), ord(last) + 1):
            row = chr(code)
            for number in range(1, seats_per_row + 1):
                positions.append((row, number))
    return positions
