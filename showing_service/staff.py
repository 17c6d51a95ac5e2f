"""
Сотрудники кинотеатра: одна плоская запись с ролью вместо иерархии классов.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMINISTRATOR = "ADMINISTRATOR"
    CONCESSIONS_SELLER = "CONCESSIONS_SELLER"


class Shift(str, Enum):
    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"
    NIGHT = "NIGHT"


@dataclass
class StaffMember:
    first_name: str
    last_name: str
    nickname: str
    email: str
    role: Role
    shift: Shift
    second_last_name: str = ""
    age: Optional[int] = None
    phone: str = ""
    weekend: bool = False           # только для администраторов
    rest_day: Optional[str] = None  # только для продавцов

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name, self.second_last_name) if part)


def describe(member: StaffMember) -> str:
    if member.role == Role.ADMINISTRATOR:
        schedule = "weekend" if member.weekend else "weekday"
        return f"Admin ({schedule}): {member.nickname}"
    if member.role == Role.CONCESSIONS_SELLER:
        return f"Concessions seller: {member.nickname} [rest day: {member.rest_day or '-'}]"
    raise ValueError(f"Unknown role: {member.role}")
