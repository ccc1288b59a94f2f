from __future__ import annotations


class ProviderError(RuntimeError):
    """A job source could not be read."""


class SheetFetchError(ProviderError):
    pass


class SquareError(ProviderError):
    pass


__all__ = ["ProviderError", "SheetFetchError", "SquareError"]
