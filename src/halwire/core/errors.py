"""Exception taxonomy shared by the core, the paging helpers and the Traverson."""


class HalError(Exception):
    """Base error for halwire failures."""


class HalValueError(HalError, ValueError):
    """A value violates a construction-time invariant (links, CURIes, paging)."""


class RelMismatchError(HalValueError):
    """A link-relation type does not match the CURI template it was applied to."""

    def __init__(self, rel: str, template: str):
        super().__init__("Rel does not match the CURI template.")
        self.rel = rel
        self.template = template


class HalParseError(HalError):
    """The document is not valid JSON or has a malformed _links/_embedded shape."""


class HalModelValidationError(HalError):
    pass


class TraversionError(HalError):
    pass


__all__ = [
    "HalError",
    "HalValueError",
    "RelMismatchError",
    "HalParseError",
    "HalModelValidationError",
    "TraversionError",
]
