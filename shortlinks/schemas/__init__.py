"""Schemas package for the Short Links Service."""

from .url import URLSaveResponse, HealthResponse

__all__ = ["URLSaveResponse", "HealthResponse"]
