"""Tests for slug generation."""

from __future__ import annotations

import pytest

from app.core.slug import generate_slug


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hạ Long Bay Cruise", "ha-long-bay-cruise"),
        ("Đà Nẵng  &  Hội An", "da-nang-hoi-an"),
        ("  --Sapa Trekking 3 Days!--  ", "sapa-trekking-3-days"),
        ("", ""),
    ],
)
def test_generate_slug(text: str, expected: str) -> None:
    assert generate_slug(text) == expected
