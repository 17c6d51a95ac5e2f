from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class RoomSchema(BaseModel):
    name: str
    capacity: int


class FilmSchema(BaseModel):
    title: str
    genre: str
    synopsis: str
    duration_minutes: int
    duration_display: str


class CreateFilmSchema(BaseModel):
    title: str = Field(min_length=1)
    genre: str = ""
    synopsis: str = ""
    duration_minutes: int = Field(gt=0)


class SeatSchema(BaseModel):
    row: str
    number: int
    occupied: bool


class UpdateSeatSchema(BaseModel):
    occupied: bool


class ShowingSchema(BaseModel):
    showing_id: str
    film_title: str
    room_name: str
    start_time: datetime
    end_time: datetime
    capacity: int
    available: int
    warnings: List[str] = []


class CreateShowingSchema(BaseModel):
    film_title: str
    room_type: str
    start_time: datetime


class ProductSchema(BaseModel):
    name: str
    price: float = Field(ge=0)


class ComboSchema(BaseModel):
    name: str
    products: List[ProductSchema]
    total_price: float


class CreateComboSchema(BaseModel):
    name: str = Field(min_length=1)
    products: List[str] = []


class AddComboProductSchema(BaseModel):
    product_name: str


class ActionLogsSchema(BaseModel):
    logs: List[dict]
    total_lines: int
    error: Optional[str] = None
