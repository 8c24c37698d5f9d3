# finsight/schemas/pagination.py
"""
Pagination metadata for list endpoints.

Usage:
    @router.get("/", response_model=PortfolioListResponse)
    def list_portfolios(
        skip: int = Query(default=0, ge=0),
        limit: int = Query(default=100, ge=1, le=MAX_LIST_LIMIT),
        db: Session = Depends(get_db),
    ):
        total = db.scalar(select(func.count()).select_from(query.subquery()))
        items = db.scalars(query.offset(skip).limit(limit)).all()
        return PortfolioListResponse(
            items=items,
            pagination=PaginationMeta.create(total=total, skip=skip, limit=limit),
        )
"""

from pydantic import BaseModel, Field, computed_field


class PaginationMeta(BaseModel):
    """
    Pagination metadata for list responses.

    Attributes:
        total: Total number of items matching the query
        skip: Number of items skipped (offset)
        limit: Maximum items returned per page
        page: Current page number (1-indexed, computed)
        pages: Total number of pages, at least 1 (computed)
        has_next: Whether there are more pages (computed)
        has_previous: Whether there are previous pages (computed)
    """

    total: int = Field(..., ge=0, description="Total number of items matching query")
    skip: int = Field(..., ge=0, description="Number of items skipped (offset)")
    limit: int = Field(..., ge=1, description="Maximum items per page")

    @computed_field
    @property
    def page(self) -> int:
        return (self.skip // self.limit) + 1

    @computed_field
    @property
    def pages(self) -> int:
        if self.total <= 0:
            return 1
        return -(-self.total // self.limit)

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.skip + self.limit < self.total

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.skip > 0

    @classmethod
    def create(cls, total: int, skip: int, limit: int) -> "PaginationMeta":
        return cls(total=total, skip=skip, limit=limit)
