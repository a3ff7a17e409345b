"""Short Links Service - bind short aliases to long URLs."""

__version__ = "0.1.0"
