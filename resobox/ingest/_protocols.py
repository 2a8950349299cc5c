"""Protocol definitions for box-sequence providers."""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from resobox.model.box import BoxSequence


@runtime_checkable
class BoxSource(Protocol):
    """Abstraction over any box-data provider (backend poller, file, mock).

    Implementations return one sequence per requested instrument, keyed by
    the normalised instrument id.  Instruments without data are omitted.
    """

    def fetch(self, instruments: Iterable[str]) -> dict[str, BoxSequence]: ...
