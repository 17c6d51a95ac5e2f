import threading
from datetime import timedelta

import pytest

from showing_service.errors import (
    ComboNotFound,
    ProductNotFound,
    ScheduleConflict,
    SeatAlreadyOccupied,
    SeatNotFound,
    ShowingNotFound,
)


def test_create_film(catalogue):
    film = catalogue.create_film("Dune", "Sci-Fi", "Spice", 155)
    assert catalogue.get_film("Dune") is film
    assert catalogue.list_films() == [film]
    assert catalogue.get_film("Missing") is None


def test_schedule_showing_admits_into_catalogue(catalogue, film, start):
    showing = catalogue.schedule_showing(film, "Sala A", start)

    assert showing.showing_id == "SW:20231025:1800:SalaA"
    assert catalogue.get_showing(showing.showing_id) is showing
    assert catalogue.list_showings() == [showing]
    assert showing.room.capacity == 150


def test_overlapping_showing_is_rejected(catalogue, film, start):
    first = catalogue.schedule_showing(film, "Sala A", start)

    with pytest.raises(ScheduleConflict) as exc_info:
        catalogue.schedule_showing(film, "Sala A", start + timedelta(minutes=119))

    assert exc_info.value.existing is first
    assert catalogue.list_showings() == [first]


def test_back_to_back_showings_are_accepted(catalogue, film, start):
    catalogue.schedule_showing(film, "Sala A", start)
    catalogue.schedule_showing(film, "Sala A", start + timedelta(minutes=120))
    catalogue.schedule_showing(film, "Sala A", start - timedelta(minutes=120))
    assert len(catalogue.list_showings(room_name="Sala A")) == 3


def test_same_time_in_other_room_is_accepted(catalogue, film, start):
    catalogue.schedule_showing(film, "Sala A", start)
    catalogue.schedule_showing(film, "Sala B", start)
    assert len(catalogue.list_showings()) == 2
    assert len(catalogue.list_showings(room_name="Sala B")) == 1


def test_duplicate_identifier_is_a_conflict(catalogue, start):
    instant = catalogue.create_film("Blink", "Short", "", 0)
    catalogue.schedule_showing(instant, "Sala VIP", start)
    with pytest.raises(ScheduleConflict):
        catalogue.schedule_showing(instant, "Sala VIP", start)


def test_list_showings_sorted_by_start(catalogue, film, start):
    late = catalogue.schedule_showing(film, "Sala A", start + timedelta(hours=4))
    early = catalogue.schedule_showing(film, "Sala B", start)
    assert catalogue.list_showings() == [early, late]


def test_remove_showing_frees_the_slot(catalogue, film, start):
    showing = catalogue.schedule_showing(film, "Sala A", start)
    assert catalogue.remove_showing(showing.showing_id) is showing

    with pytest.raises(ShowingNotFound):
        catalogue.get_showing(showing.showing_id)
    with pytest.raises(ShowingNotFound):
        catalogue.remove_showing(showing.showing_id)

    catalogue.schedule_showing(film, "Sala A", start + timedelta(minutes=30))


def test_unrecognized_room_still_schedules(catalogue, film, start):
    with pytest.warns(UserWarning):
        showing = catalogue.schedule_showing(film, "Sala IMAX", start)
    assert showing.room.capacity == 0
    assert showing.showing_id == "SW:20231025:1800:SalaIMAX"


def test_find_seat(catalogue, film, start):
    showing = catalogue.schedule_showing(film, "Sala A", start)
    seat = catalogue.find_seat(showing, "C", 7)
    assert (seat.row, seat.number, seat.occupied) == ("C", 7, False)

    with pytest.raises(SeatNotFound):
        catalogue.find_seat(showing, "Z", 1)


def test_set_seat_occupied(catalogue, film, start):
    showing = catalogue.schedule_showing(film, "Sala A", start)
    catalogue.set_seat_occupied(showing, "A", 1, True)
    assert catalogue.find_seat(showing, "A", 1).occupied is True
    catalogue.set_seat_occupied(showing, "A", 1, False)
    assert catalogue.find_seat(showing, "A", 1).occupied is False

    with pytest.raises(SeatNotFound):
        catalogue.set_seat_occupied(showing, "A", 99, True)


def test_reserve_and_release_seat(catalogue, film, start):
    showing = catalogue.schedule_showing(film, "Sala VIP", start)
    catalogue.reserve_seat(showing, "H", 6)
    with pytest.raises(SeatAlreadyOccupied):
        catalogue.reserve_seat(showing, "H", 6)
    assert catalogue.release_seat(showing, "H", 6).occupied is False


def test_occupancy_is_isolated_per_showing(catalogue, film, start):
    evening = catalogue.schedule_showing(film, "Sala VIP", start)
    night = catalogue.schedule_showing(film, "Sala VIP", start + timedelta(hours=3))

    for seat in evening.room.list_seats():
        catalogue.reserve_seat(evening, seat.row, seat.number)

    assert evening.room.available_count == 0
    assert night.room.available_count == 48


def test_concurrent_reservations_have_single_winner(catalogue, film, start):
    showing = catalogue.schedule_showing(film, "Sala A", start)
    barrier = threading.Barrier(20)
    results = []

    def attempt():
        barrier.wait()
        try:
            catalogue.reserve_seat(showing, "E", 8)
            results.append("ok")
        except SeatAlreadyOccupied:
            results.append("taken")

    threads = [threading.Thread(target=attempt) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("taken") == 19


def test_concurrent_overlapping_schedules_admit_one(catalogue, film, start):
    barrier = threading.Barrier(10)
    results = []

    def attempt(offset):
        barrier.wait()
        try:
            catalogue.schedule_showing(film, "Sala B", start + timedelta(minutes=offset))
            results.append("ok")
        except ScheduleConflict:
            results.append("conflict")

    threads = [threading.Thread(target=attempt, args=(i * 5,)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert len(catalogue.list_showings(room_name="Sala B")) == 1


def test_combo_operations(catalogue):
    catalogue.add_product("Popcorn", 80.0)
    catalogue.add_product("Soda", 40.0)

    combo = catalogue.create_combo("Duo", ["Popcorn", "Soda"])
    assert catalogue.combo_total(combo) == pytest.approx(108.0)

    catalogue.add_product_to_combo("Duo", "Soda")
    assert catalogue.combo_total(catalogue.get_combo("Duo")) == pytest.approx(144.0)

    with pytest.raises(ProductNotFound):
        catalogue.create_combo("Bad", ["Caviar"])
    with pytest.raises(ComboNotFound):
        catalogue.get_combo("Bad")


def test_clear(catalogue, film, start):
    catalogue.schedule_showing(film, "Sala A", start)
    catalogue.clear()
    assert catalogue.list_films() == []
    assert catalogue.list_showings() == []
