from __future__ import annotations

import math
from typing import Iterable, List, Optional

from ..core.errors import HalValueError
from ..core.link import Link, link, self_link
from ..core.links import Links
from ..core.uri_templates import expand
from .rels import ALL_PAGING_RELS, UNBOUNDED, PagingRel


class NumberedPaging:
    """
    Paging links for resources addressed by page number and page size,
    e.g. ``/products{?page,pageSize}``. Page numbers start at ``first_page``
    (0 or 1 in practice).
    """

    def __init__(
        self,
        page_number: int,
        page_size: int,
        *,
        has_more: Optional[bool] = None,
        total: Optional[int] = None,
        first_page: int = 0,
        page_var: str = "page",
        page_size_var: str = "pageSize",
    ):
        if page_number < first_page:
            raise HalValueError(
                f"Parameter 'pageNumber' must not be less than {first_page}"
            )
        if page_size <= 0:
            raise HalValueError("Parameter 'pageSize' must be greater zero")
        if has_more is not None and total is not None:
            raise HalValueError("Parameters 'hasMore' and 'total' must not be given together")
        if total is not None:
            if total < 0:
                raise HalValueError("Parameter 'total' must be greater than or equal to zero")
        elif has_more and page_size == UNBOUNDED:
            raise HalValueError("Unable to calculate next page for unbounded page sizes.")

        self.page_number = page_number
        self.page_size = page_size
        self.total = total
        self.first_page = first_page
        self.page_var = page_var
        self.page_size_var = page_size_var
        if total is not None:
            has_more = page_number < self.last_page  # type: ignore[operator]
        self.has_more = bool(has_more)

    @property
    def last_page(self) -> Optional[int]:
        if self.total is None:
            return None
        pages = math.ceil(self.total / self.page_size)
        return self.first_page + max(pages - 1, 0)

    def links(
        self, page_uri_template: str, rels: Iterable[PagingRel] = ALL_PAGING_RELS
    ) -> Links:
        rels = frozenset(rels)
        result: List[Link] = []
        if PagingRel.SELF in rels:
            result.append(self_link(self._page_uri(page_uri_template, self.page_number)))
        if PagingRel.FIRST in rels:
            result.append(link("first", self._page_uri(page_uri_template, self.first_page)))
        if self.page_number > self.first_page and PagingRel.PREV in rels:
            result.append(link("prev", self._page_uri(page_uri_template, self.page_number - 1)))
        if self.has_more and PagingRel.NEXT in rels:
            result.append(link("next", self._page_uri(page_uri_template, self.page_number + 1)))
        if self.last_page is not None and PagingRel.LAST in rels:
            result.append(link("last", self._page_uri(page_uri_template, self.last_page)))
        return Links(result)

    def _page_uri(self, template: str, page_number: int) -> str:
        if self.page_size == UNBOUNDED:
            if page_number == self.first_page:
                return expand(template)
            return expand(template, {self.page_var: page_number})
        return expand(
            template, {self.page_var: page_number, self.page_size_var: self.page_size}
        )

    def __repr__(self) -> str:
        return (
            f"NumberedPaging(page_number={self.page_number}, page_size={self.page_size}, "
            f"first_page={self.first_page}, has_more={self.has_more}, total={self.total})"
        )


def zero_based_numbered_paging(
    page_number: int,
    page_size: int,
    *,
    has_more: Optional[bool] = None,
    total: Optional[int] = None,
    page_var: str = "page",
    page_size_var: str = "pageSize",
) -> NumberedPaging:
    return NumberedPaging(
        page_number,
        page_size,
        has_more=has_more,
        total=total,
        first_page=0,
        page_var=page_var,
        page_size_var=page_size_var,
    )


def one_based_numbered_paging(
    page_number: int,
    page_size: int,
    *,
    has_more: Optional[bool] = None,
    total: Optional[int] = None,
    page_var: str = "page",
    page_size_var: str = "pageSize",
) -> NumberedPaging:
    return NumberedPaging(
        page_number,
        page_size,
        has_more=has_more,
        total=total,
        first_page=1,
        page_var=page_var,
        page_size_var=page_size_var,
    )


__all__ = ["NumberedPaging", "zero_based_numbered_paging", "one_based_numbered_paging"]
