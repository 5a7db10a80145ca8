from __future__ import annotations

from typing import Iterable, List, Optional

from ..core.errors import HalValueError
from ..core.link import Link, link, self_link
from ..core.links import Links
from ..core.uri_templates import expand
from .rels import ALL_PAGING_RELS, UNBOUNDED, PagingRel


class SkipLimitPaging:
    """
    Paging links for resources addressed by ``skip`` (items to skip) and
    ``limit`` (page size), e.g. ``/products{?skip,limit}``.

    Either ``has_more`` or ``total_count`` describes what lies beyond the
    current page. Only a known total produces a ``last`` link.
    """

    def __init__(
        self,
        skip: int,
        limit: int,
        *,
        has_more: Optional[bool] = None,
        total_count: Optional[int] = None,
        skip_var: str = "skip",
        limit_var: str = "limit",
    ):
        if skip < 0:
            raise HalValueError("Parameter 'skip' must not be less than zero")
        if limit <= 0:
            raise HalValueError("Parameter 'limit' must be greater zero")
        if has_more is not None and total_count is not None:
            raise HalValueError(
                "Parameters 'hasMore' and 'totalCount' must not be given together"
            )
        if total_count is not None:
            if total_count < 0:
                raise HalValueError(
                    "Parameter 'totalCount' must be greater than or equal to zero"
                )
            if total_count < skip:
                raise HalValueError("Parameter 'totalCount' must be greater 'skip'")
            has_more = skip + limit < total_count
        elif has_more and limit == UNBOUNDED:
            raise HalValueError("Unable to calculate next page for unbounded page sizes.")

        self.skip = skip
        self.limit = limit
        self.has_more = bool(has_more)
        self.total_count = total_count
        self.skip_var = skip_var
        self.limit_var = limit_var

    def links(
        self, page_uri_template: str, rels: Iterable[PagingRel] = ALL_PAGING_RELS
    ) -> Links:
        rels = frozenset(rels)
        result: List[Link] = []
        if PagingRel.SELF in rels:
            result.append(self_link(self._page_uri(page_uri_template, self.skip)))
        if PagingRel.FIRST in rels:
            result.append(link("first", self._page_uri(page_uri_template, 0)))
        if self.skip > 0 and PagingRel.PREV in rels:
            prev_skip = max(0, self.skip - self.limit)
            result.append(link("prev", self._page_uri(page_uri_template, prev_skip)))
        if self.has_more and PagingRel.NEXT in rels:
            next_skip = self.skip + self.limit
            result.append(link("next", self._page_uri(page_uri_template, next_skip)))
        if self.total_count is not None and PagingRel.LAST in rels:
            result.append(link("last", self._page_uri(page_uri_template, self.last_page_skip)))
        return Links(result)

    @property
    def last_page_skip(self) -> Optional[int]:
        """Skip of the last page, or None when the total is unknown."""
        if self.total_count is None:
            return None
        total, skip, limit = self.total_count, self.skip, self.limit
        if skip > total - limit:
            return skip
        if total % limit > 0:
            return total - total % limit
        # exact multiple: last full page, not an empty one behind it
        return total - limit

    def _page_uri(self, template: str, skip: int) -> str:
        if self.limit == UNBOUNDED:
            return expand(template)
        return expand(template, {self.skip_var: skip, self.limit_var: self.limit})

    def __repr__(self) -> str:
        return (
            f"SkipLimitPaging(skip={self.skip}, limit={self.limit}, "
            f"has_more={self.has_more}, total_count={self.total_count})"
        )


def skip_limit_page(
    skip: int,
    limit: int,
    *,
    has_more: Optional[bool] = None,
    total_count: Optional[int] = None,
) -> SkipLimitPaging:
    return SkipLimitPaging(skip, limit, has_more=has_more, total_count=total_count)


__all__ = ["SkipLimitPaging", "skip_limit_page"]
