"""Result type for loading operations at the checkout boundary.

The pricing core never fails on well-formed input; only the code that
reads price sheets, rule files and the environment can, and it reports
failures as values instead of raising.
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result: TypeAlias = Ok[T] | Err[E]
