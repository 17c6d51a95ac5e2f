class CinemaError(Exception):
    """Базовое исключение доменных ошибок кинотеатра (все восстановимые)"""


class ScheduleConflict(CinemaError):
    """Сеанс пересекается по времени с уже существующим сеансом в том же зале"""

    def __init__(self, candidate, existing):
        self.candidate = candidate
        self.existing = existing
        message = (
            f"Showing {candidate.showing_id} "
            f"({candidate.start_time:%Y-%m-%d %H:%M}-{candidate.end_time:%H:%M}) "
            f"overlaps {existing.showing_id} in {existing.room_name}"
        )
        super().__init__(message)


class SeatNotFound(CinemaError, LookupError):
    """Места с такими координатами нет в зале"""

    def __init__(self, row: str, number: int, room_name: str = None):
        self.row = row
        self.number = number
        self.room_name = room_name
        where = f" in {room_name}" if room_name else ""
        super().__init__(f"Seat {row}{number} not found{where}")


class SeatAlreadyOccupied(CinemaError):
    """Место уже занято"""

    def __init__(self, row: str, number: int):
        self.row = row
        self.number = number
        super().__init__(f"Seat {row}{number} is already occupied")


class ShowingNotFound(CinemaError, LookupError):
    def __init__(self, showing_id: str):
        self.showing_id = showing_id
        super().__init__(f"Showing {showing_id} not found")


class FilmNotFound(CinemaError, LookupError):
    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Film '{title}' not found")


class ProductNotFound(CinemaError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Product '{name}' not found")


class ComboNotFound(CinemaError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Combo '{name}' not found")


class UnrecognizedRoomType(UserWarning):
    """Неизвестный тип зала: зал создаётся пустым, сеанс не отклоняется"""

    def __init__(self, room_type: str):
        self.room_type = room_type
        super().__init__(f"Unrecognized room type '{room_type}', room created without seats")
