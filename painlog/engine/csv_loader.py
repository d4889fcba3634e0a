"""
CSV Loader for Pain Log Exports

Turns an uploaded file into an ordered list of raw records:
- Rejects files that are not CSV before reading them
- Decodes UTF-8 (with or without BOM), then the platform default encoding
- Parses the header row and data rows, skipping empty lines
- Converts each cell to its most natural scalar (int, float, text, None)

Structural problems abort the whole file; no partial record list is returned.
"""

import codecs
import csv
import io
import locale
import re
from typing import Dict, List, Optional

from .models import RawRecord, Scalar
from painlog.utils.logging import get_logger

logger = get_logger(__name__)


ACCEPTED_CONTENT_TYPES = ("text/csv",)
ACCEPTED_EXTENSIONS = (".csv",)

_INT_RE = re.compile(r"^\s*-?\d+\s*$")
_FLOAT_RE = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")


class UnsupportedFileTypeError(ValueError):
    """Raised when an upload is not a CSV file."""
    pass


class CsvParseError(ValueError):
    """Raised when an upload cannot be decoded or parsed as CSV."""
    pass


def check_file_type(file_name: Optional[str], content_type: Optional[str] = None) -> None:
    """
    Accept an upload only if it looks like CSV.

    Either the MIME type is text/csv or the file name ends in .csv.

    Raises:
        UnsupportedFileTypeError: If neither condition holds
    """
    if content_type and content_type.split(";")[0].strip().lower() in ACCEPTED_CONTENT_TYPES:
        return
    if file_name and file_name.lower().endswith(ACCEPTED_EXTENSIONS):
        return
    raise UnsupportedFileTypeError(
        f"Only CSV files can be uploaded (got {file_name or 'unnamed file'!r})."
    )


def decode_upload(file_bytes: bytes) -> str:
    """
    Decode uploaded bytes to text.

    Tries UTF-8 first (a leading BOM is dropped), then the platform's
    preferred encoding.

    Raises:
        CsvParseError: If the bytes can't be decoded with either encoding
    """
    try:
        return file_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        utf8_error = e

    fallback = locale.getpreferredencoding(False)
    try:
        fallback_is_utf8 = codecs.lookup(fallback).name == "utf-8"
    except LookupError:
        fallback_is_utf8 = False
    if fallback_is_utf8:
        raise CsvParseError(f"Could not decode file as UTF-8: {utf8_error}") from utf8_error

    try:
        text = file_bytes.decode(fallback)
    except (UnicodeDecodeError, LookupError) as e:
        raise CsvParseError(f"Could not decode file as UTF-8 or {fallback}: {e}") from e
    logger.debug("Decoded upload with fallback encoding %s", fallback)
    return text.lstrip("\ufeff")


def coerce_scalar(value: str) -> Scalar:
    """
    Convert one CSV cell to its most natural scalar type.

    "" -> None, "3" -> 3, "2.5" / "1e3" -> float, anything else unchanged.
    """
    if value == "":
        return None
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value


def _is_empty_row(row: List[str]) -> bool:
    return all(cell == "" for cell in row)


def parse_csv_text(text: str) -> List[RawRecord]:
    """
    Parse CSV text with a header row into raw records.

    Args:
        text: Decoded file content

    Returns:
        One dict per non-empty data row, keyed by header names, in file order.
        Empty when the text has no header row.

    Raises:
        CsvParseError: If a row's field count differs from the header's, or
            the csv module rejects the content (e.g. an unterminated quote)
    """
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)

    header: Optional[List[str]] = None
    records: List[RawRecord] = []
    try:
        for row in reader:
            if _is_empty_row(row):
                continue
            if header is None:
                header = row
                continue
            if len(row) != len(header):
                raise CsvParseError(
                    f"Line {reader.line_num}: expected {len(header)} fields, found {len(row)}."
                )
            record: Dict[str, Scalar] = {
                name: coerce_scalar(cell) for name, cell in zip(header, row)
            }
            records.append(record)
    except csv.Error as e:
        raise CsvParseError(f"Line {reader.line_num}: {e}") from e

    logger.debug("Parsed %d raw records (columns: %s)", len(records), header)
    return records


def load_raw_records_from_upload(file_bytes: bytes) -> List[RawRecord]:
    """
    Load raw records from uploaded file bytes.

    This is the main entry point for CSV loading from file uploads.

    Args:
        file_bytes: Raw bytes from file upload

    Returns:
        List of raw records in file order

    Raises:
        CsvParseError: If the file can't be decoded or parsed
    """
    return parse_csv_text(decode_upload(file_bytes))
