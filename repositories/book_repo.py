"""
repositories/book_repo.py
-------------------------
Data access layer for books.
All SQL queries related to the `books` table live here.
"""

from datetime import date, datetime
from typing import Optional

from db.connection import get_connection, release_connection
from models.book import Book
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, title, author, published_date"


class BookMappingError(ValueError):
    """Raised when a database row cannot be converted into a Book."""


def row_to_book(row: tuple) -> Book:
    """
    Convert a ``(id, title, author, published_date)`` row into a Book.

    Raises:
        BookMappingError: If the row has the wrong shape or a field has
            an unexpected type.
    """
    if row is None or len(row) != 4:
        raise BookMappingError(f"Expected a 4-column book row, got {row!r}")

    book_id, title, author, published = row

    # bool is an int subclass
    if not isinstance(book_id, int) or isinstance(book_id, bool):
        raise BookMappingError(f"Field 'id' must be int, got {type(book_id).__name__}")
    if not isinstance(title, str):
        raise BookMappingError(f"Field 'title' must be str, got {type(title).__name__}")
    if not isinstance(author, str):
        raise BookMappingError(f"Field 'author' must be str, got {type(author).__name__}")
    if isinstance(published, datetime):
        published = published.date()
    elif not isinstance(published, date):
        raise BookMappingError(
            f"Field 'published_date' must be date, got {type(published).__name__}"
        )

    return Book(id=book_id, title=title, author=author, published_date=published)


class BookRepository:
    """Repository for CRUD operations on the books table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, book: Book) -> int:
        """
        Insert a new book. Any id already set on `book` is ignored.

        Args:
            book: The Book domain object to persist.

        Returns:
            The id generated by the database.
        """
        sql = """
            INSERT INTO books (title, author, published_date)
            VALUES (%s, %s, %s)
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (book.title, book.author, book.published_date))
                book_id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Added book #{book_id} '{book.title}'")
            return book_id
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add book: {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Book]:
        """
        Fetch every book, in whatever order the database returns them.

        Returns:
            List of Book objects (empty if the table is empty).
        """
        sql = f"SELECT {_COLUMNS} FROM books;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [row_to_book(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """
        Fetch a single book by ID.

        Returns:
            A Book object or None if not found.
        """
        sql = f"SELECT {_COLUMNS} FROM books WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (book_id,))
                row = cur.fetchone()
                return row_to_book(row) if row else None
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, book: Book) -> bool:
        """
        Overwrite title, author and published_date of an existing book.
        An unknown id is a no-op.

        Args:
            book: Book with updated fields (must have id set).

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE books
            SET title = %s, author = %s, published_date = %s
            WHERE id = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (book.title, book.author, book.published_date, book.id))
                updated = cur.rowcount > 0
            conn.commit()
            if updated:
                logger.info(f"Updated book #{book.id}")
            return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update book #{book.id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, book_id: int) -> bool:
        """
        Delete a book by ID. An unknown id is a no-op.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM books WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (book_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted book #{book_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete book #{book_id}: {e}")
            raise
        finally:
            release_connection(conn)
