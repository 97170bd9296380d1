"""
handlers/book_handler.py
------------------------
HTTP endpoints for books, mounted under /book.
Each endpoint delegates to exactly one BookRepository call.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, field_validator

from models.book import Book
from repositories.book_repo import BookRepository
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/book", tags=["book"])


class _BookFields(BaseModel):
    title: str
    author: str
    published_date: date

    @field_validator("title", "author")
    @classmethod
    def no_nul_characters(cls, value: str) -> str:
        # PostgreSQL text columns cannot store NUL
        if "\x00" in value:
            raise ValueError("must not contain NUL characters")
        return value


class BookCreate(_BookFields):
    id: Optional[int] = None  # accepted but ignored


class BookUpdate(_BookFields):
    id: int


class BookOut(BaseModel):
    id: int
    title: str
    author: str
    published_date: date

    @classmethod
    def from_book(cls, book: Book) -> "BookOut":
        return cls(**book.to_dict())


def get_book_repository() -> BookRepository:
    """Dependency that provides the book repository."""
    return BookRepository()


@router.get("", response_model=list[BookOut])
def get_all(repo: BookRepository = Depends(get_book_repository)) -> list[BookOut]:
    """List all books. An empty shelf is an empty list."""
    return [BookOut.from_book(b) for b in repo.get_all()]


@router.get("/{book_id}", response_model=BookOut)
def get_by_id(book_id: int, repo: BookRepository = Depends(get_book_repository)) -> BookOut:
    """Get a book by ID."""
    book = repo.get_by_id(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return BookOut.from_book(book)


@router.post("", response_model=int)
def create(payload: BookCreate, repo: BookRepository = Depends(get_book_repository)) -> int:
    """Create a book and return its generated id."""
    book = Book(
        title=payload.title,
        author=payload.author,
        published_date=payload.published_date,
    )
    return repo.create(book)


@router.put("")
def update(payload: BookUpdate, repo: BookRepository = Depends(get_book_repository)) -> Response:
    """
    Replace title, author and published_date of a book.

    Returns 200 even when no book has the given id.
    """
    book = Book(
        id=payload.id,
        title=payload.title,
        author=payload.author,
        published_date=payload.published_date,
    )
    if not repo.update(book):
        logger.info(f"PUT /book: no book #{payload.id}, nothing updated")
    return Response(status_code=200)


@router.delete("/{book_id}")
def delete(book_id: int, repo: BookRepository = Depends(get_book_repository)) -> Response:
    """Delete a book. Returns 200 even when no book has the given id."""
    if not repo.delete(book_id):
        logger.info(f"DELETE /book/{book_id}: no such book, nothing deleted")
    return Response(status_code=200)
