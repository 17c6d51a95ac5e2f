import pytest

from showing_service.errors import UnrecognizedRoomType
from showing_service.layouts import generate_layout, layout_capacity, room_types
from showing_service.models import Room


@pytest.mark.parametrize("room_type, expected", [
    ("Sala A", 150),
    ("Sala B", 4 * 7 + 6 * 15),
    ("Sala VIP", 48),
])
def test_seat_count_matches_layout(room_type, expected):
    room = Room(room_type)
    assert room.capacity == expected
    assert layout_capacity(room_type) == expected
    assert len(generate_layout(room_type)) == expected


def test_sala_b_has_front_and_rear_sections():
    room = Room("Sala B")
    front_row = [s for s in room.list_seats() if s.row == "D"]
    rear_row = [s for s in room.list_seats() if s.row == "E"]
    assert [s.number for s in front_row] == list(range(1, 8))
    assert [s.number for s in rear_row] == list(range(1, 16))
    assert room.find_seat("D", 8) is None
    assert room.find_seat("E", 15) is not None


def test_generation_order_rows_then_numbers():
    positions = generate_layout("Sala VIP")
    assert positions[0] == ("A", 1)
    assert positions[5] == ("A", 6)
    assert positions[6] == ("B", 1)
    assert positions[-1] == ("H", 6)
    assert positions == sorted(positions, key=lambda p: (ord(p[0]), p[1]))


def test_seat_coordinates_are_unique():
    for room_type in room_types():
        positions = generate_layout(room_type)
        assert len(positions) == len(set(positions))


def test_regenerating_layout_is_idempotent():
    room = Room("Sala A")
    before = [(s.row, s.number) for s in room.list_seats()]

    room.configure_seats()
    room.configure_seats()

    after = [(s.row, s.number) for s in room.list_seats()]
    assert after == before
    assert room.capacity == 150


def test_regenerating_layout_resets_occupancy():
    room = Room("Sala VIP")
    room.reserve("A", 1)
    room.configure_seats()
    assert room.occupied_count == 0


def test_unrecognized_room_type_yields_empty_room_with_warning():
    with pytest.warns(UnrecognizedRoomType) as record:
        room = Room("Sala Z")

    assert room.capacity == 0
    assert room.list_seats() == []
    assert room.recognized is False
    assert record[0].message.room_type == "Sala Z"


def test_unrecognized_room_type_is_a_warning_not_an_error():
    assert issubclass(UnrecognizedRoomType, UserWarning)

    with pytest.warns(UnrecognizedRoomType):
        assert generate_layout("Sala 4DX") == []
    assert layout_capacity("Sala 4DX") == 0
