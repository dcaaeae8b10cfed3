from __future__ import annotations

import re
from datetime import date

SPECIES_CODES = {
    "rabbit": "RAB",
    "chicken": "CHK",
    "cow": "COW",
    "goat": "GOA",
    "sheep": "SHP",
    "pig": "PIG",
}


def species_code(species_name: str | None) -> str:
    name = (species_name or "").strip().lower()
    for key, code in SPECIES_CODES.items():
        if key in name:
            return code
    letters = re.sub(r"[^a-z]", "", name)
    return letters[:3].upper() if letters else "UNK"


def tag_prefix(code: str, birth_date: date) -> str:
    return f"{code}{birth_date.year % 100:02d}"


def tag_pattern(code: str, birth_date: date) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(tag_prefix(code, birth_date))}\d{{3}}$")


def format_tag(code: str, birth_date: date, sequence: int) -> str:
    return f"{tag_prefix(code, birth_date)}{sequence:03d}"
