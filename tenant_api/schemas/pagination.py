"""Pagination schemas."""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class PaginationParams(BaseModel):
    """Offset/limit paging requested by a caller."""
    page: int = Field(1, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    class Config:
        frozen = True

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


class PaginationResponse(BaseModel):
    """Paging metadata returned alongside a list."""
    page: int
    page_size: int
    total: int
    total_pages: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def build(cls, params: PaginationParams, total: int) -> "PaginationResponse":
        total_pages = (total + params.page_size - 1) // params.page_size
        return cls(
            page=params.page,
            page_size=params.page_size,
            total=total,
            total_pages=total_pages,
        )
