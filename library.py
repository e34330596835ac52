from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from book import Book
from database import BookGateway, StorageError


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    INVALID_INPUT = "invalid_input"


@dataclass
class OperationResult:
    """Outcome of a catalog operation: a value on success, an error kind on failure."""

    ok: bool
    message: str = ""
    value: Any = None
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, message: str = "", value: Any = None) -> "OperationResult":
        return cls(ok=True, message=message, value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "OperationResult":
        return cls(ok=False, message=message, error=error)


class Library:
    """Manages the book catalog on top of a storage gateway."""

    def __init__(self, gateway: BookGateway) -> None:
        self.gateway = gateway

    # ------------------------- Core operations ------------------------- #
    def list_books(self) -> OperationResult:
        try:
            books: List[Book] = self.gateway.load_all()
        except StorageError as e:
            return OperationResult.failure(ErrorKind.STORAGE, str(e))
        return OperationResult.success(value=books)

    def add_book(self, title: str, author: str, category: str) -> OperationResult:
        book = Book(title=title, author=author, category=category)
        return self._run(
            lambda: self.gateway.insert(book),
            value=book,
            ok_message="Book added successfully.",
            fail_message="Failed to add book.",
        )

    def update_book(self, book_id: int, title: str, author: str, category: str) -> OperationResult:
        book = Book(id=book_id, title=title, author=author, category=category)
        return self._run(
            lambda: self.gateway.update(book),
            value=book,
            ok_message="Book updated successfully.",
            fail_message="Failed to update book.",
        )

    def delete_book(self, book_id: int) -> OperationResult:
        return self._run(
            lambda: self.gateway.delete(book_id),
            value=book_id,
            ok_message="Book deleted successfully.",
            fail_message="Failed to delete book.",
        )

    # ------------------------- Utilities ------------------------- #
    @staticmethod
    def _run(statement, value: Any, ok_message: str, fail_message: str) -> OperationResult:
        """Run a gateway statement and map its outcome onto a result.

        Zero affected rows means the record was not there; a StorageError
        means the statement itself failed.
        """
        try:
            affected = statement()
        except StorageError:
            return OperationResult.failure(ErrorKind.STORAGE, fail_message)
        if not affected:
            return OperationResult.failure(ErrorKind.NOT_FOUND, fail_message)
        return OperationResult.success(ok_message, value)

    def close(self) -> None:
        self.gateway.close()
