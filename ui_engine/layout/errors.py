"""
Errors raised when a box tree cannot be laid out.
"""

from typing import Optional

from .box import EntityId


class TreeError(Exception):
    """Base class for malformed box trees."""

    def __init__(self, message: str, entity: Optional[EntityId] = None):
        super().__init__(message)
        self.entity = entity


class MultipleRoots(TreeError):
    """More than one box has no parent."""


class MissingRoot(TreeError):
    """Boxes exist but a chain of parents never reaches a root."""


class InconsistentSibling(TreeError):
    """A sibling chain does not end at a single first child of the parent."""


class UnknownBox(TreeError):
    """A parent or sibling reference names an entity without a box."""
