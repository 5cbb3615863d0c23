"""Base classes for the transform pipeline.

A transform consumes a TokenRecordSet and returns a new one. Transforms
hold only their immutable parameter, so one instance may be shared by
any number of samplers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logit_sampler.selection.types import TokenRecordSet


class Transform(ABC):
    """Abstract base class for pipeline stages.

    Implementations must never introduce ids that are not in the input
    set, and must recompute probabilities whenever they rescale logits.
    """

    name: str = ""

    @abstractmethod
    def apply(self, tokens: TokenRecordSet) -> TokenRecordSet:
        """Filter or reshape a candidate set.

        Args:
            tokens: The current candidate set.

        Returns:
            A new candidate set (possibly empty).
        """

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({params})"


class Pipeline:
    """Ordered, immutable sequence of transforms."""

    __slots__ = ("_transforms",)

    def __init__(self, transforms: Iterable[Transform] = ()) -> None:
        self._transforms: tuple[Transform, ...] = tuple(transforms)

    def apply(self, tokens: TokenRecordSet) -> TokenRecordSet:
        """Run every transform in order."""
        for transform in self._transforms:
            tokens = transform.apply(tokens)
        return tokens

    @property
    def names(self) -> tuple[str, ...]:
        """Stage names in application order."""
        return tuple(t.name for t in self._transforms)

    def __iter__(self) -> Iterator[Transform]:
        return iter(self._transforms)

    def __len__(self) -> int:
        return len(self._transforms)

    def __repr__(self) -> str:
        return f"Pipeline({list(self._transforms)!r})"
