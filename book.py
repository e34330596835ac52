from __future__ import annotations


class Book:
    """Katalogdaki tek bir kitap kaydını temsil eder."""

    def __init__(self, title: str, author: str, category: str, id: int | None = None) -> None:
        # id veritabanı tarafından atanır; kaydedilene kadar None kalır
        self.id = id
        self.title = (title or "").strip()
        self.author = (author or "").strip()
        self.category = (category or "").strip()

    def __str__(self) -> str:
        return f"ID: {self.id}, Title: {self.title}, Author: {self.author}, Category: {self.category}"

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r}, category={self.category!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "category": self.category,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        raw_id = data.get("id")
        return Book(
            id=int(raw_id) if raw_id is not None else None,
            title=data["title"],
            author=data["author"],
            category=data.get("category") or "",
        )
