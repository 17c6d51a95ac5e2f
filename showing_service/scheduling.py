"""
Проверка пересечения сеансов.

Два сеанса конфликтуют, если они в одном зале и их интервалы
[начало, начало + длительность фильма) пересекаются. Модуль не хранит
состояние: блокировку по залу держит вызывающий код (ShowingCatalogue).
"""
from datetime import datetime
from typing import Iterable, List

from showing_service.errors import ScheduleConflict
from showing_service.models import Showing


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return a_start < b_end and b_start < a_end


def conflicts_with(a: Showing, b: Showing) -> bool:
    if a.room_name != b.room_name:
        return False
    return intervals_overlap(a.start_time, a.end_time, b.start_time, b.end_time)


def find_conflicts(existing: Iterable[Showing], candidate: Showing) -> List[Showing]:
    return [showing for showing in existing if showing is not candidate and conflicts_with(showing, candidate)]


def check_schedule(existing: Iterable[Showing], candidate: Showing):
    """Выбрасывает ScheduleConflict, если кандидат пересекается хотя бы с одним сеансом"""
    conflicts = find_conflicts(existing, candidate)
    if conflicts:
        raise ScheduleConflict(candidate, conflicts[0])
