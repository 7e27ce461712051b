from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from chrldb.chembl.record import CHEMBL_COLUMNS, CompoundRecord

logger = logging.getLogger(__name__)

DELIMITER = "\t"
HEADER_SENTINEL = CHEMBL_COLUMNS[0]


class ParseError(ValueError):
    """Raised when a dump line cannot be split into a compound record."""

    def __init__(self, message: str, line_number: int, line: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
        self.line = line


@dataclass(frozen=True)
class SkippedLine:
    line_number: int
    reason: str
    text: str


def is_header(fields: list[str]) -> bool:
    return fields[0].strip().lstrip("\ufeff").lower() == HEADER_SENTINEL


def split_line(line: str, line_number: int) -> list[str]:
    """Split one dump line, raising ParseError unless the four leading columns are present."""
    try:
        line.encode("utf-8")
    except UnicodeEncodeError as e:
        # surrogate escapes left by the reader mark bytes that are not UTF-8
        raise ParseError(f"invalid UTF-8 at column {e.start + 1}", line_number, line) from e
    fields = line.split(DELIMITER)
    if len(fields) < len(CHEMBL_COLUMNS):
        raise ParseError(
            f"expected {len(CHEMBL_COLUMNS)} tab-separated fields, found {len(fields)}",
            line_number, line,
        )
    for name, value in zip(CHEMBL_COLUMNS, fields):
        if not value:
            raise ParseError(f"empty {name}", line_number, line)
    return fields


def iter_records(
    lines: Iterable[str],
    strict: bool = False,
    skipped: list[SkippedLine] | None = None,
    headers: list[int] | None = None,
) -> Iterator[tuple[int, CompoundRecord]]:
    """
    Yield ``(line_number, record)`` for each data line.

    Blank lines and header rows (first field ``chembl_id``) are passed over.
    Header line numbers are appended to ``headers``. A malformed line raises
    ParseError when ``strict``; otherwise it is logged, appended to ``skipped``
    and parsing continues.
    """
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if is_header(line.split(DELIMITER)):
            logger.debug("Skipping header at line %d", line_number)
            if headers is not None:
                headers.append(line_number)
            continue
        try:
            fields = split_line(line, line_number)
        except ParseError as e:
            if strict:
                raise
            logger.warning("Skipping malformed line: %s", e)
            if skipped is not None:
                skipped.append(SkippedLine(line_number, str(e), line))
            continue
        yield line_number, CompoundRecord.from_fields(fields)
