from . import (
    admin,
    health,
    spa,
    submissions,
)

__all__ = [
    "admin",
    "health",
    "spa",
    "submissions",
]
