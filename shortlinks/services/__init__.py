"""Services package - alias assignment and resolution."""

from .assignment import Assignment, AliasAssigner
from .resolver import LinkResolver

__all__ = ["Assignment", "AliasAssigner", "LinkResolver"]
