import re
import unicodedata


def generate_slug(text: str) -> str:
    """URL-friendly slug; Vietnamese diacritics are folded to ASCII ("Hạ Long" -> "ha-long")"""
    if not text:
        return ""
    text = text.lower().replace("đ", "d")
    text = unicodedata.normalize("NFKD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "-", text).strip("-")
