"""Book vertical — the one entity / repository / handler triad.

- SQLAlchemy model with EntityMixin (id, created, updated)
- Repository with title and author projections
- FastAPI router rendering the books page
- Sample fixtures
"""
