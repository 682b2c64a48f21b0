"""
CSV import of wishlist items.

Admins paste (or upload) CSV text with a header row. Header names are
matched case-insensitively against a few accepted synonyms; anything
unrecognized is carried onto the item as an extra field.

Example:
    itemName,recipientCode,tags
    Bike,LAUREN,"red,shiny"
"""
import logging
import re
from typing import Optional

from api.services.errors import CsvParseError
from api.services.normalizer import as_item_id, family_or_default, split_tags
from api.services.wishlist_models import Item

logger = logging.getLogger(__name__)

# CSV tags also accept ';' as a separator
CSV_TAG_SPLIT_PATTERN = re.compile(r"[/|,;]+")

# Header keys consumed by the item mapping (everything else passes through)
RECOGNIZED_HEADERS = {
    "itemid", "id",
    "recipientcode", "recipient", "recipientname",
    "itemname", "name",
    "details", "notes",
    "url",
    "tags", "tag",
    "claimedbycode", "claimedby",
    "family",
}


def _first(record: dict, *keys: str) -> str:
    """Return the first non-empty value among keys."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return ""


def _split_rows(text: str) -> list[list[str]]:
    """
    Split CSV text into rows of raw cells.

    A double quote toggles quoting wherever it appears, so a quoted section
    may follow leading spaces or start mid-cell. Inside quotes ``""`` is a
    literal quote and commas and newlines are data.
    """
    rows = []
    row = []
    cell = []
    in_quotes = False
    pending = False  # consumed anything since the last row break
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            if in_quotes and text[i + 1:i + 2] == '"':
                cell.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
            pending = True
        elif ch == "," and not in_quotes:
            row.append("".join(cell))
            cell = []
            pending = True
        elif ch == "\n" and not in_quotes:
            row.append("".join(cell))
            rows.append(row)
            row, cell = [], []
            pending = False
        else:
            cell.append(ch)
            pending = True
        i += 1

    if in_quotes:
        logger.warning("CSV text parse error: unterminated quoted field")
        raise CsvParseError("CSV parse error.")

    if pending:
        row.append("".join(cell))
        rows.append(row)
    return rows


def parse_csv_text(text: str) -> list[dict]:
    """
    Parse CSV text into records keyed by lower-cased header.

    Args:
        text: Raw CSV text; the first row is the header

    Returns:
        One dict per non-blank data row, values trimmed

    Raises:
        CsvParseError: If a quoted field is never closed
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    rows = _split_rows(text)

    if not rows:
        return []

    header = [h.strip() for h in rows[0]]
    keys = [h.lower() if h else f"col{c}" for c, h in enumerate(header)]

    records = []
    for row in rows[1:]:
        if not "".join(row).strip():
            continue
        fields = [cell.strip() for cell in row]
        record = {}
        for c, key in enumerate(keys):
            record[key] = fields[c] if c < len(fields) else ""
        records.append(record)

    return records


def record_to_item(record: dict, item_id: int, default_family: Optional[str] = None) -> Item:
    """Map one CSV record onto an Item."""
    raw_tags = _first(record, "tags", "tag")
    claimed_by = _first(record, "claimedbycode", "claimedby")

    return Item(
        id=item_id,
        recipientCode=_first(record, "recipientcode", "recipient"),
        recipientName=_first(record, "recipientname", "recipient"),
        itemName=_first(record, "itemname", "name"),
        details=_first(record, "details", "notes"),
        url=_first(record, "url"),
        tags=split_tags(raw_tags, CSV_TAG_SPLIT_PATTERN),
        claimedByCode=claimed_by or None,
        family=family_or_default(record.get("family") or default_family),
        extra={k: v for k, v in record.items() if k not in RECOGNIZED_HEADERS},
    )


def records_to_items(
    records: list[dict],
    taken_ids: set[int],
    default_family: Optional[str] = None,
) -> list[Item]:
    """
    Convert parsed records into new items with store-wide unique ids.

    A numeric id supplied in the row is kept unless it is already taken;
    otherwise the next id after the highest seen is assigned.

    Args:
        records: Output of parse_csv_text
        taken_ids: Ids already present in the store (updated in place)
        default_family: Family used when a row has none

    Returns:
        New Item objects, in row order
    """
    max_id = max(taken_ids, default=0)
    items = []

    for record in records:
        item_id = as_item_id(_first(record, "itemid", "id"))
        if item_id is None or item_id in taken_ids:
            max_id += 1
            item_id = max_id
        elif item_id > max_id:
            max_id = item_id

        taken_ids.add(item_id)
        items.append(record_to_item(record, item_id, default_family))

    return items
