from math import ceil
from .base import CamelDTO

class PaginationDTO(CamelDTO):
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.page_size)


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def build_pagination(page: int, page_size: int, total_count: int) -> PaginationDTO:
    total_pages = ceil(total_count / page_size) if total_count else 0
    return PaginationDTO(
        page=page,
        page_size=page_size,
        total_count=total_count,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )
