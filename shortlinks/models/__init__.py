"""Models package for the Short Links Service."""

from .url import URLSaveRequest, ErrorResponse

__all__ = ["URLSaveRequest", "ErrorResponse"]
