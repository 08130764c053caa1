"""Test the repository base and the book projections."""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from verticals.book.fixtures import SAMPLE_BOOKS, load_books
from verticals.book.models.db_models import Book
from verticals.book.repository import BookRepository


def test_save_then_read_back(repo):
    book = Book(title="Dune", author="Frank Herbert")
    repo.save(book)
    assert (book.id, "Dune") in repo.titles()
    assert (book.id, "Frank Herbert") in repo.authors()


def test_save_commits(repo, session_factory):
    book = Book(title="Dune", author="Frank Herbert")
    repo.save(book)
    # a separate unit of work sees the row
    with session_factory() as other:
        assert BookRepository(other).find(book.id) is not None


def test_delete_then_read_back(repo):
    keep = Book(title="Dune", author="Frank Herbert")
    gone = Book(title="Emma", author="Jane Austen")
    repo.save(keep)
    repo.save(gone)

    repo.delete(gone)

    assert set(repo.titles()) == {(keep.id, "Dune")}
    assert set(repo.authors()) == {(keep.id, "Frank Herbert")}
    assert repo.find(gone.id) is None


def test_projections_cover_whole_table(repo, session):
    load_books(session)
    session.commit()
    titles = repo.titles()
    authors = repo.authors()
    assert len(titles) == len(SAMPLE_BOOKS)
    assert {t for _, t in titles} == {b["title"] for b in SAMPLE_BOOKS}
    assert {a for _, a in authors} == {b["author"] for b in SAMPLE_BOOKS}
    assert {i for i, _ in titles} == {i for i, _ in authors}


def test_projections_empty_table(repo):
    assert repo.titles() == []
    assert repo.authors() == []


def test_projection_keeps_null_values(repo):
    book = Book(title="Anonymous pamphlet")
    repo.save(book)
    assert repo.authors() == [(book.id, None)]


def test_query_builder_bound_to_session(repo, session):
    query = repo.query()
    assert isinstance(query, Query)
    assert query.session is session
    repo.save(Book(title="Dune"))
    assert repo.query().count() == 1
    assert repo.query(Book.title).scalar() == "Dune"


def test_find_helpers(repo):
    dune = Book(title="Dune", author="Frank Herbert")
    emma = Book(title="Emma", author="Jane Austen")
    repo.save(dune)
    repo.save(emma)

    assert repo.find(dune.id) is dune
    assert {b.id for b in repo.find_all()} == {dune.id, emma.id}
    assert repo.find_by(author="Jane Austen") == [emma]
    assert repo.find_by(author="Nobody") == []


def test_failed_save_propagates_and_rolls_back(repo):
    first = Book(title="Dune")
    repo.save(first)

    clash = Book(id=first.id, title="Duplicate")
    repo.session.expunge(first)
    with pytest.raises(IntegrityError):
        repo.save(clash)

    # session is usable again after the rollback
    repo.session.expunge_all()
    assert [t for _, t in repo.titles()] == ["Dune"]
