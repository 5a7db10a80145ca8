import sys
from enum import Enum


class PagingRel(str, Enum):
    """Link-relation types produced by the paging helpers."""

    SELF = "self"
    FIRST = "first"
    PREV = "prev"
    NEXT = "next"
    LAST = "last"

    def __str__(self) -> str:
        return self.value


ALL_PAGING_RELS = frozenset(PagingRel)

# Page size meaning "everything on one page"; page URIs then carry no size.
UNBOUNDED = sys.maxsize


__all__ = ["PagingRel", "ALL_PAGING_RELS", "UNBOUNDED"]
