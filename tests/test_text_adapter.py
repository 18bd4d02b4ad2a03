from datetime import date
from decimal import Decimal

import pytest

from conftest import make_ledger
from innkeeper.adapters.text_adapter import (
    RESERVATIONS_FILE,
    ROOMS_FILE,
    TextFileReservationAdapter,
    format_rows,
    parse_rows,
    reservation_from_row,
    reservation_to_row,
    room_from_row,
    room_to_row,
)
from innkeeper.models import Reservation, Room, RoomCategory


class TestLineFormat:

    def test_room_line(self):
        room = Room("101", RoomCategory.STANDARD, Decimal("100"))
        assert format_rows([room_to_row(room)]) == "101,STANDARD,100.00,true\n"
        parsed = room_from_row(parse_rows("201,deluxe,150.5,false\n")[0])
        assert parsed == Room("201", RoomCategory.DELUXE, Decimal("150.50"), False)

    def test_reservation_line(self):
        res = Reservation("AB12CD34", "101", "Alice", date(2024, 1, 10), date(2024, 1, 12), Decimal("200"))
        text = format_rows([reservation_to_row(res)])
        assert text == "AB12CD34,101,Alice,2024-01-10,2024-01-12,200.00,false\n"

        parsed = reservation_from_row(parse_rows(text)[0])
        assert parsed.reservation_id == "AB12CD34"
        assert parsed.total_price == Decimal("200.00")
        assert parsed.is_confirmed is False
        assert parsed.created_at is None

    def test_guest_name_with_comma_is_quoted(self):
        res = Reservation("AB12CD34", "101", "Doe, Jane", date(2024, 1, 10), date(2024, 1, 12), Decimal("200"))
        text = format_rows([reservation_to_row(res)])
        assert '"Doe, Jane"' in text
        assert reservation_from_row(parse_rows(text)[0]).guest_name == "Doe, Jane"

    @pytest.mark.parametrize("line", ["101,STANDARD,100.00", "101,STANDARD,abc,true", "101,VILLA,1,true"])
    def test_bad_room_lines(self, line):
        with pytest.raises(ValueError):
            room_from_row(parse_rows(line)[0])


class TestTextFileAdapter:

    def test_missing_files_load_empty(self, tmp_path):
        adapter = TextFileReservationAdapter(f"file://{tmp_path / 'data'}")
        adapter.init()
        assert adapter.load_rooms() == []
        assert adapter.load_reservations() == []

    def test_round_trip(self, tmp_path):
        adapter = TextFileReservationAdapter(str(tmp_path))
        adapter.init()
        rooms = [Room("101", RoomCategory.STANDARD, Decimal("100")), Room("301", RoomCategory.SUITE, Decimal("250"))]
        adapter.save_rooms(rooms)
        assert adapter.load_rooms() == rooms

        res = Reservation(
            "AB12CD34", "101", "Alice", date(2024, 1, 10), date(2024, 1, 12), Decimal("200"), is_confirmed=True
        )
        adapter.save_reservations([res])
        loaded = adapter.load_reservations()
        assert len(loaded) == 1
        assert loaded[0].is_confirmed is True
        assert loaded[0].check_out == date(2024, 1, 12)
        assert (tmp_path / RESERVATIONS_FILE).read_text(encoding="utf-8").count("\n") == 1

    def test_malformed_lines_are_skipped(self, tmp_path):
        (tmp_path / ROOMS_FILE).write_text(
            "101,STANDARD,100.00,true\nnot a room\n\n201,DELUXE,150.00,false\n", encoding="utf-8"
        )
        adapter = TextFileReservationAdapter(str(tmp_path))
        assert [r.room_id for r in adapter.load_rooms()] == ["101", "201"]

    def test_names_with_commas_do_not_block_later_saves(self, tmp_path):
        adapter = TextFileReservationAdapter(str(tmp_path))
        adapter.init()
        ledger = make_ledger(adapter=adapter)

        jane = ledger.book("101", "Doe, Jane", date(2024, 1, 10), date(2024, 1, 12))
        bob = ledger.book("102", "Bob", date(2024, 1, 10), date(2024, 1, 12))
        assert not ledger.is_dirty

        loaded = adapter.load_reservations()
        assert [(r.reservation_id, r.guest_name) for r in loaded] == [
            (jane.reservation_id, "Doe, Jane"),
            (bob.reservation_id, "Bob"),
        ]

    def test_quoted_newline_round_trips(self, tmp_path):
        adapter = TextFileReservationAdapter(str(tmp_path))
        res = Reservation("AB12CD34", "101", 'Jane "JJ"\nDoe', date(2024, 1, 10), date(2024, 1, 12), Decimal("200"))
        adapter.save_reservations([res])
        assert adapter.load_reservations()[0].guest_name == 'Jane "JJ"\nDoe'
