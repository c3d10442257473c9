"""Tests for booking code and notification formatting."""

from __future__ import annotations

import re

from app.modules.bookings.service import format_booking_message, generate_booking_code


class TestBookingCode:
    def test_format(self) -> None:
        assert re.fullmatch(r"BK-\d{8}-[0-9A-F]{6}", generate_booking_code())

    def test_codes_differ(self) -> None:
        assert len({generate_booking_code() for _ in range(20)}) > 1


class TestBookingMessage:
    def test_escapes_customer_input(self) -> None:
        text = format_booking_message(
            {
                "booking_code": "BK-1",
                "customer_name": "<b>Mallory</b>",
                "customer_email": "m@example.com",
                "people_count": 2,
                "message": "a & b",
            },
            tour_title="Hạ Long Bay",
        )

        assert "&lt;b&gt;Mallory&lt;/b&gt;" in text
        assert "<b>Mallory</b>" not in text
        assert "a &amp; b" in text
        assert "Tour: Hạ Long Bay" in text

    def test_missing_fields_render_as_dash(self) -> None:
        text = format_booking_message({"booking_code": "BK-1", "customer_name": "Ann", "customer_email": "a@x.io"})

        assert "Phone: -" in text
        assert "Message" not in text
