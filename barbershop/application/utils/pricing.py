from __future__ import annotations

import re

# Leading currency symbols (any non-word, non-space characters), then the amount.
_AMOUNT = re.compile(r"^[^\w\s]*\s*(\d+)")


def parse_price(display: str) -> int:
    """
    Amount of a display price such as "$50", "€45" or "$60+".
    Thousands separators are ignored; anything without a leading amount counts as 0.
    """
    cleaned = display.replace(",", "").strip()
    match = _AMOUNT.match(cleaned)
    if not match:
        return 0
    return int(match.group(1))
