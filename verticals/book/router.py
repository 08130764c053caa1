"""Book router — HTML listing of titles and authors.

Single route, single state: read both projections, render the page. Any
failure propagates to the application's error handler (generic 500).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from core.engine.template_engine import TemplateEngine, get_template_engine
from verticals.book.repository import BookRepository, get_book_repository

router = APIRouter()


@router.get("/books", response_class=HTMLResponse, name="books::list")
def list_books(
    repo: BookRepository = Depends(get_book_repository),
    templates: TemplateEngine = Depends(get_template_engine),
) -> HTMLResponse:
    """List every book title and author."""
    titles = repo.titles()
    authors = repo.authors()
    return HTMLResponse(
        templates.render("page::books", {"titles": titles, "authors": authors})
    )
