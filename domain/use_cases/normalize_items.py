from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from domain.entities import ExtractedItem


DEFAULT_REPLACEMENT_COST = 25.99
DEFAULT_BRAND = "No Brand"

# leading number, after currency symbols and thousands separators are dropped
_NUMBER_PREFIX = re.compile(r"^[+]?(\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _text(candidate: Mapping, *keys: str) -> Optional[str]:
    """First value among ``keys`` that is present and not "", as a string."""
    for key in keys:
        value = candidate.get(key)
        if value is None or isinstance(value, (dict, list)):
            continue
        s = str(value)
        if s != "":
            return s
    return None


def parse_cost(value: Any) -> Optional[float]:
    """Parse a cost the model may have sent as a number or a string like "$1,299.00".

    Returns None for missing, negative or non-numeric values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        s = value.strip().lstrip("$€£").replace(",", "").strip()
        m = _NUMBER_PREFIX.match(s)
        if not m:
            return None
        num = float(m.group(0))
    else:
        return None
    if math.isnan(num) or math.isinf(num) or num < 0:
        return None
    return num


def normalize_item(candidate: Any, index: int, file_label: str) -> ExtractedItem:
    if not isinstance(candidate, Mapping):
        candidate = {}

    brand_or_manufacturer = _text(candidate, "brandOrManufacturer", "brand") or DEFAULT_BRAND
    item_description = (
        _text(candidate, "itemDescription", "description") or f"Item {index + 1} from {file_label}"
    )
    cost = parse_cost(candidate.get("costToReplace"))
    if cost is None:
        cost = DEFAULT_REPLACEMENT_COST
    total = parse_cost(candidate.get("totalCost"))
    if total is None:
        total = cost

    return ExtractedItem(
        brand_or_manufacturer=brand_or_manufacturer,
        model_number=_text(candidate, "modelNumber", "model") or "",
        item_description=item_description,
        cost_to_replace=cost,
        total_cost=total,
        # mirror the resolved values so a second pass is a no-op
        brand=_text(candidate, "brand") or brand_or_manufacturer,
        description=_text(candidate, "description") or item_description,
    )


def normalize_items(candidates: Iterable[Any], file_label: str) -> List[ExtractedItem]:
    return [normalize_item(c, i, file_label) for i, c in enumerate(candidates)]
