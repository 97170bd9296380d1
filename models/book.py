"""
models/book.py
--------------
Domain model for a book on the shelf.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Book:
    """
    Represents a single book.

    Attributes:
        title: Book title.
        author: Author name.
        published_date: Date the book was first published.
        id: Database primary key (None for new records).
    """
    title: str
    author: str
    published_date: date
    id: Optional[int] = None

    def is_persisted(self) -> bool:
        """Returns True once the store has assigned an id."""
        return self.id is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "published_date": self.published_date.isoformat(),
        }

    def __str__(self) -> str:
        ref = f"#{self.id}" if self.is_persisted() else "(new)"
        return f"{ref} {self.title} by {self.author} ({self.published_date})"
