from datetime import date

import pytest
from fastapi.testclient import TestClient

from handlers.book_handler import get_book_repository
from main import create_app
from models.book import Book


class FakeCursor:
    """Stands in for a psycopg2 cursor; records every execute call."""

    def __init__(self, fetchone=None, fetchall=None, rowcount=0, error=None):
        self.executed = []
        self._fetchone = fetchone
        self._fetchall = fetchall or []
        self.rowcount = rowcount
        self._error = error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        if self._error is not None:
            raise self._error

    def fetchone(self):
        return self._fetchone

    def fetchall(self):
        return self._fetchall


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0

    def cursor(self):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakePool:
    """Hands out a single FakeConnection and tracks borrow/return."""

    def __init__(self, cursor: FakeCursor):
        self.conn = FakeConnection(cursor)
        self.borrowed = 0
        self.released = 0

    def get_connection(self):
        self.borrowed += 1
        return self.conn

    def release_connection(self, conn):
        assert conn is self.conn
        self.released += 1


@pytest.fixture
def fake_db(monkeypatch):
    """Return a factory that wires a FakePool into the book repository."""
    import repositories.book_repo as book_repo

    def _install(**cursor_kwargs) -> FakePool:
        fake = FakePool(FakeCursor(**cursor_kwargs))
        monkeypatch.setattr(book_repo, "get_connection", fake.get_connection)
        monkeypatch.setattr(book_repo, "release_connection", fake.release_connection)
        return fake

    return _install


class InMemoryBookRepository:
    """Dict-backed replacement for BookRepository used by handler tests."""

    def __init__(self):
        self.books: dict[int, Book] = {}
        self._next_id = 1

    def get_all(self) -> list[Book]:
        return list(self.books.values())

    def get_by_id(self, book_id: int):
        return self.books.get(book_id)

    def create(self, book: Book) -> int:
        book_id = self._next_id
        self._next_id += 1
        self.books[book_id] = Book(
            id=book_id,
            title=book.title,
            author=book.author,
            published_date=book.published_date,
        )
        return book_id

    def update(self, book: Book) -> bool:
        if book.id not in self.books:
            return False
        self.books[book.id] = book
        return True

    def delete(self, book_id: int) -> bool:
        return self.books.pop(book_id, None) is not None


@pytest.fixture
def repo():
    return InMemoryBookRepository()


@pytest.fixture
def client(repo):
    app = create_app(init_db=False)
    app.dependency_overrides[get_book_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def dune() -> Book:
    return Book(title="Dune", author="Herbert", published_date=date(1965, 8, 1))
