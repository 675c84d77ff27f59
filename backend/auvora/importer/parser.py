"""Line-oriented CSV parsing and header normalization.

The parser is minimal: a double quote toggles quoted mode and a
comma only separates fields outside quotes. Quoted fields cannot span lines
and ``""`` is not unescaped to a literal quote (it toggles twice).
"""
import re
from collections.abc import Sequence

from auvora.importer.errors import EmptyInputError

_WHITESPACE_RUN = re.compile(r"\s+")


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes, dropping a UTF-8 BOM and replacing bad bytes."""
    return content.decode("utf-8-sig", errors="replace")


def parse_line(line: str) -> list[str]:
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    cells.append("".join(current).strip())
    return cells


def parse_csv(text: str) -> list[list[str]]:
    """Split raw text into rows of trimmed cells.

    Blank lines are dropped rather than turned into empty rows.

    Raises:
        EmptyInputError: no non-blank line was found.
    """
    rows = [parse_line(line) for line in text.split("\n") if line.strip()]
    if not rows:
        raise EmptyInputError()
    return rows


def normalize_header(header: str) -> str:
    """``"Full  Name"`` -> ``"full_name"``. Idempotent."""
    return _WHITESPACE_RUN.sub("_", header.lower())


def normalize_headers(headers: Sequence[str]) -> list[str]:
    return [normalize_header(h) for h in headers]


def row_to_record(headers: Sequence[str], row: Sequence[str]) -> dict[str, str]:
    """Zip normalized headers with a row's cells.

    Missing trailing cells become ``""`` and surplus cells are ignored. When
    two headers normalize to the same key the later column wins.
    """
    record: dict[str, str] = {}
    for index, header in enumerate(headers):
        record[header] = row[index] if index < len(row) else ""
    return record
