"""Paging links (self/first/prev/next/last) for collection resources."""

from .numbered import NumberedPaging, one_based_numbered_paging, zero_based_numbered_paging
from .rels import ALL_PAGING_RELS, UNBOUNDED, PagingRel
from .skip_limit import SkipLimitPaging, skip_limit_page

__all__ = [
    "PagingRel",
    "ALL_PAGING_RELS",
    "UNBOUNDED",
    "SkipLimitPaging",
    "skip_limit_page",
    "NumberedPaging",
    "zero_based_numbered_paging",
    "one_based_numbered_paging",
]
