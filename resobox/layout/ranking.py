"""Magnitude ordering — the recursion order of the fractal layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union, overload

import numpy as np

from resobox.model.box import Box, BoxSequence


@dataclass(frozen=True)
class RankedSequence:
    """Boxes sorted by ``abs(value)`` descending; index 0 is the root.

    ``source_index[i]`` is the arrival position of ``boxes[i]``.
    """

    boxes: tuple[Box, ...] = ()
    source_index: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if len(self.boxes) != len(self.source_index):
            raise ValueError(
                f"boxes ({len(self.boxes)}) and source_index "
                f"({len(self.source_index)}) must have the same length"
            )

    def __len__(self) -> int:
        return len(self.boxes)

    def __iter__(self) -> Iterator[Box]:
        return iter(self.boxes)

    @overload
    def __getitem__(self, item: int) -> Box: ...

    @overload
    def __getitem__(self, item: slice) -> RankedSequence: ...

    def __getitem__(self, item):
        if isinstance(item, slice):
            return RankedSequence(self.boxes[item], self.source_index[item])
        return self.boxes[item]

    @property
    def values(self) -> np.ndarray:
        return np.array([b.value for b in self.boxes], dtype=float)


def rank(sequence: Union[BoxSequence, Iterable[Box]]) -> RankedSequence:
    """Sort boxes by descending absolute magnitude.

    The sort is stable: equal magnitudes keep their arrival order, so the
    same input always produces the same index assignment.
    """
    boxes = tuple(sequence.boxes if isinstance(sequence, BoxSequence) else sequence)
    if not boxes:
        return RankedSequence()

    magnitudes = np.abs(np.array([b.value for b in boxes], dtype=float))
    order = np.argsort(-magnitudes, kind="stable")
    return RankedSequence(
        boxes=tuple(boxes[i] for i in order),
        source_index=tuple(int(i) for i in order),
    )
