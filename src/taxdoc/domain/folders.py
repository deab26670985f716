from __future__ import annotations

import re

OTHER_FOLDER = "その他"

# Half-open [start, end) ranges over the 4-digit canonical prefix.
CATEGORY_FOLDER_RANGES: tuple[tuple[int, int, str], ...] = (
    (0, 1000, "0000番台_法人税"),
    (1000, 2000, "1000番台_都道府県税"),
    (2000, 3000, "2000番台_市民税"),
    (3000, 4000, "3000番台_消費税"),
    (4000, 5000, "4000番台_事業所税"),
    (5000, 6000, "5000番台_決算書類"),
    (6000, 7000, "6000番台_固定資産"),
    (7000, 8000, "7000番台_税区分集計表"),
)

_LEADING_PREFIX = re.compile(r"^([0-9]{4})")


def resolve_folder(canonical_name: str) -> str:
    """
    Map a canonical filename to its category folder by its leading 4 digits.

    Examples:
        >>> resolve_folder("0001_法人税及び地方法人税申告書_2407.pdf")
        '0000番台_法人税'
        >>> resolve_folder("8000_x_2407.pdf")
        'その他'
        >>> resolve_folder("受信通知.pdf")
        'その他'
    """
    match = _LEADING_PREFIX.match(canonical_name or "")
    if not match:
        return OTHER_FOLDER
    number = int(match.group(1))
    for start, end, folder in CATEGORY_FOLDER_RANGES:
        if start <= number < end:
            return folder
    return OTHER_FOLDER
