"""Navigation capability consumed by the controllers.

Controllers never route themselves; they ask a ``Navigator`` to move to one
of the three logical views. The concrete router belongs to the front-end.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class Navigator(ABC):
    """Interface for moving between the list, create and edit views."""

    @abstractmethod
    def to_list(self) -> None:
        ...

    @abstractmethod
    def to_create(self) -> None:
        ...

    @abstractmethod
    def to_edit(self, event_id: int) -> None:
        ...
