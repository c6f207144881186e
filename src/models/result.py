# src/models/result.py

"""Success/failure wrapper handed from fetchers to views."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a remote fetch.

    ``value`` is always usable: on failure it holds the safe empty
    default, and ``error`` carries the message the view should show.
    """

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, fallback: T, error: str) -> "FetchResult[T]":
        return cls(value=fallback, error=error or "request failed")
