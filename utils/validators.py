import re
from typing import Optional

from library import ErrorKind, OperationResult

# İşaret ve ardından yalnızca ASCII rakamlar; "1_000" veya "١٢" kabul edilmez
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# SQL INTEGER / BIGINT aralığı
MIN_BOOK_ID = -(2 ** 63)
MAX_BOOK_ID = 2 ** 63 - 1


class IdValidator:
    """Parses book ids typed by the operator."""

    @staticmethod
    def parse_book_id(raw: Optional[str]) -> OperationResult:
        text = (raw or "").strip()
        if not _ID_PATTERN.fullmatch(text):
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, f"Invalid book ID: '{text}' is not a number."
            )
        book_id = int(text)
        if not MIN_BOOK_ID <= book_id <= MAX_BOOK_ID:
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT, f"Invalid book ID: '{text}' is out of range."
            )
        return OperationResult.success(value=book_id)
