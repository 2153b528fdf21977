"""
Set-once attributes for parse-tree nodes.

Nodes are hashed by their fields, so a field may be assigned once in
``__init__`` and never rebound.
"""

from __future__ import annotations


class Immutable:
    """Mixin that rejects rebinding an attribute once it has a value."""

    __slots__ = ()

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, name):
            raise AttributeError(
                f"cannot reassign '{name}' of immutable {type(self).__name__}"
            )
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"cannot delete '{name}' of immutable {type(self).__name__}")
