from typing import List, Optional

from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from showing_service import config
from showing_service.errors import (
    ComboNotFound,
    ProductNotFound,
    ScheduleConflict,
    SeatAlreadyOccupied,
    SeatNotFound,
    ShowingNotFound,
    UnrecognizedRoomType,
)
from showing_service.layouts import layout_capacity, room_types
from showing_service.logger import logger, setup_logging
from showing_service.logging_service import get_logs, log_action
from showing_service.models import Combo, Film, Seat, Showing
from showing_service.persistence import ensure_data_dir, load_catalogue, save_catalogue
from showing_service.schemas import (
    ActionLogsSchema,
    AddComboProductSchema,
    ComboSchema,
    CreateComboSchema,
    CreateFilmSchema,
    CreateShowingSchema,
    FilmSchema,
    ProductSchema,
    RoomSchema,
    SeatSchema,
    ShowingSchema,
    UpdateSeatSchema,
)
from showing_service.storage import catalogue

app = FastAPI(
    title="Showing Service",
    docs_url="/docs"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    setup_logging(config.LOG_DIR)
    if config.PERSIST:
        ensure_data_dir(config.DATA_DIR)
        load_catalogue(catalogue, config.CATALOGUE_FILE)
    logger.info("Showing Service started")


def persist():
    if config.PERSIST:
        save_catalogue(catalogue, config.CATALOGUE_FILE)


def film_to_schema(film: Film) -> FilmSchema:
    return FilmSchema(
        title=film.title,
        genre=film.genre,
        synopsis=film.synopsis,
        duration_minutes=film.duration_minutes,
        duration_display=film.duration_display
    )


def showing_to_schema(showing: Showing) -> ShowingSchema:
    warnings = []
    if not showing.room.recognized:
        warnings.append(str(UnrecognizedRoomType(showing.room_name)))
    return ShowingSchema(
        showing_id=showing.showing_id,
        film_title=showing.film.title,
        room_name=showing.room_name,
        start_time=showing.start_time,
        end_time=showing.end_time,
        capacity=showing.room.capacity,
        available=showing.room.available_count,
        warnings=warnings
    )


def seat_to_schema(seat: Seat) -> SeatSchema:
    return SeatSchema(row=seat.row, number=seat.number, occupied=seat.occupied)


def combo_to_schema(combo: Combo) -> ComboSchema:
    return ComboSchema(
        name=combo.name,
        products=[ProductSchema(name=p.name, price=p.price) for p in combo.products],
        total_price=catalogue.combo_total(combo)
    )


def get_showing_or_404(showing_id: str) -> Showing:
    try:
        return catalogue.get_showing(showing_id)
    except ShowingNotFound as e:
        logger.error(str(e))
        raise HTTPException(status_code=404, detail="Showing not found")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/rooms", response_model=List[RoomSchema])
def get_rooms():
    """Получить все типы залов"""
    logger.info("GET /rooms")
    return [RoomSchema(name=name, capacity=layout_capacity(name)) for name in room_types()]


@app.get("/films", response_model=List[FilmSchema])
def get_films():
    logger.info("GET /films")
    return [film_to_schema(film) for film in catalogue.list_films()]


@app.post("/films", response_model=FilmSchema, status_code=201)
def create_film(data: CreateFilmSchema, x_user_id: Optional[str] = Header(default=None)):
    """Добавить фильм"""
    logger.info(f"POST /films - {data.title}")
    film = catalogue.create_film(data.title, data.genre, data.synopsis, data.duration_minutes)
    persist()

    log_action(
        action="CREATE_FILM",
        user_id=x_user_id or "admin",
        details={"title": film.title, "duration_minutes": film.duration_minutes}
    )
    return film_to_schema(film)


@app.get("/showings", response_model=List[ShowingSchema])
def get_showings(room: Optional[str] = None):
    logger.info(f"GET /showings room={room}")
    return [showing_to_schema(s) for s in catalogue.list_showings(room_name=room)]


@app.post("/showings", response_model=ShowingSchema, status_code=201)
def create_showing(data: CreateShowingSchema, x_user_id: Optional[str] = Header(default=None)):
    """Создать новый сеанс"""
    logger.info(f"POST /showings - {data.film_title} in {data.room_type} at {data.start_time}")

    film = catalogue.get_film(data.film_title)
    if film is None:
        raise HTTPException(status_code=404, detail="Film not found")

    try:
        showing = catalogue.schedule_showing(film, data.room_type, data.start_time)
    except ScheduleConflict as e:
        raise HTTPException(status_code=409, detail=str(e))

    persist()

    log_action(
        action="CREATE_SHOWING",
        user_id=x_user_id or "admin",
        details={
            "showing_id": showing.showing_id,
            "film_title": film.title,
            "room_name": showing.room_name,
            "start_time": showing.start_time.isoformat()
        }
    )
    return showing_to_schema(showing)


@app.get("/showings/{showing_id}", response_model=ShowingSchema)
def get_showing(showing_id: str):
    logger.info(f"GET /showings/{showing_id}")
    return showing_to_schema(get_showing_or_404(showing_id))


@app.delete("/showings/{showing_id}")
def delete_showing(showing_id: str, x_user_id: Optional[str] = Header(default=None)):
    """Удалить сеанс"""
    logger.info(f"DELETE /showings/{showing_id}")

    try:
        showing = catalogue.remove_showing(showing_id)
    except ShowingNotFound:
        raise HTTPException(status_code=404, detail="Showing not found")

    persist()

    log_action(
        action="DELETE_SHOWING",
        user_id=x_user_id or "admin",
        details={
            "showing_id": showing_id,
            "film_title": showing.film.title,
            "room_name": showing.room_name
        }
    )
    return {"status": "ok", "message": "Showing deleted"}


@app.get("/showings/{showing_id}/seats", response_model=List[SeatSchema])
def get_seats(showing_id: str):
    logger.info(f"GET /showings/{showing_id}/seats")
    showing = get_showing_or_404(showing_id)
    return [seat_to_schema(seat) for seat in showing.room.list_seats()]


@app.get("/showings/{showing_id}/seats/{row}/{number}", response_model=SeatSchema)
def get_seat(showing_id: str, row: str, number: int):
    showing = get_showing_or_404(showing_id)
    try:
        seat = catalogue.find_seat(showing, row, number)
    except SeatNotFound:
        raise HTTPException(status_code=404, detail="Seat not found")
    return seat_to_schema(seat)


@app.put("/showings/{showing_id}/seats/{row}/{number}", response_model=SeatSchema)
def update_seat(showing_id: str, row: str, number: int, data: UpdateSeatSchema,
                x_user_id: Optional[str] = Header(default=None)):
    """Обновить статус места"""
    logger.info(f"PUT /showings/{showing_id}/seats/{row}/{number} - occupied={data.occupied}")
    showing = get_showing_or_404(showing_id)

    try:
        seat = catalogue.set_seat_occupied(showing, row, number, data.occupied)
    except SeatNotFound:
        raise HTTPException(status_code=404, detail="Seat not found")

    persist()

    log_action(
        action="UPDATE_SEAT",
        user_id=x_user_id or "anonymous",
        details={"showing_id": showing_id, "seat": seat.code, "occupied": seat.occupied}
    )
    return seat_to_schema(seat)


@app.post("/showings/{showing_id}/seats/{row}/{number}/reserve", response_model=SeatSchema)
def reserve_seat(showing_id: str, row: str, number: int, x_user_id: Optional[str] = Header(default=None)):
    """Занять место (только если оно свободно)"""
    logger.info(f"POST /showings/{showing_id}/seats/{row}/{number}/reserve")
    showing = get_showing_or_404(showing_id)

    try:
        seat = catalogue.reserve_seat(showing, row, number)
    except SeatNotFound:
        raise HTTPException(status_code=404, detail="Seat not found")
    except SeatAlreadyOccupied:
        logger.warning(f"Seat {row}{number} of {showing_id} not available")
        raise HTTPException(status_code=409, detail="Seat not available")

    persist()

    log_action(
        action="RESERVE_SEAT",
        user_id=x_user_id or "anonymous",
        details={"showing_id": showing_id, "seat": seat.code}
    )
    return seat_to_schema(seat)


@app.post("/showings/{showing_id}/seats/{row}/{number}/release", response_model=SeatSchema)
def release_seat(showing_id: str, row: str, number: int, x_user_id: Optional[str] = Header(default=None)):
    """Освободить место"""
    logger.info(f"POST /showings/{showing_id}/seats/{row}/{number}/release")
    showing = get_showing_or_404(showing_id)

    try:
        seat = catalogue.release_seat(showing, row, number)
    except SeatNotFound:
        raise HTTPException(status_code=404, detail="Seat not found")

    persist()

    log_action(
        action="RELEASE_SEAT",
        user_id=x_user_id or "anonymous",
        details={"showing_id": showing_id, "seat": seat.code}
    )
    return seat_to_schema(seat)


@app.post("/products", response_model=ProductSchema, status_code=201)
def create_product(data: ProductSchema):
    logger.info(f"POST /products - {data.name}")
    product = catalogue.add_product(data.name, data.price)
    persist()
    return ProductSchema(name=product.name, price=product.price)


@app.post("/combos", response_model=ComboSchema, status_code=201)
def create_combo(data: CreateComboSchema):
    """Создать комбо из существующих товаров"""
    logger.info(f"POST /combos - {data.name}")
    try:
        combo = catalogue.create_combo(data.name, data.products)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    persist()
    return combo_to_schema(combo)


@app.post("/combos/{name}/products", response_model=ComboSchema)
def add_combo_product(name: str, data: AddComboProductSchema):
    logger.info(f"POST /combos/{name}/products - {data.product_name}")
    try:
        combo = catalogue.add_product_to_combo(name, data.product_name)
    except (ComboNotFound, ProductNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    persist()
    return combo_to_schema(combo)


@app.get("/combos/{name}", response_model=ComboSchema)
def get_combo(name: str):
    logger.info(f"GET /combos/{name}")
    try:
        combo = catalogue.get_combo(name)
    except ComboNotFound:
        raise HTTPException(status_code=404, detail="Combo not found")
    return combo_to_schema(combo)


@app.get("/actions", response_model=ActionLogsSchema)
def get_user_actions(limit: int = 100):
    """Получить логи действий пользователей"""
    logger.info("GET /actions")
    try:
        logs = get_logs(limit)
    except OSError as e:
        logger.error(f"Error getting user actions logs: {e}")
        return ActionLogsSchema(logs=[], total_lines=0, error=str(e))
    return ActionLogsSchema(logs=logs, total_lines=len(logs))
