"""Test principals and request helpers shared by the API tests."""

from __future__ import annotations

ADMIN_ID = "user-admin"
EDITOR_ID = "user-editor"
OUTSIDER_ID = "user-outsider"


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
