"""Background jobs running inside the API process.

- Reaper: periodic deletion of expired lifecycle rows
"""

from src.infrastructure.jobs.reaper import PendingCounts, ReapReport, Reaper

__all__ = [
    "PendingCounts",
    "ReapReport",
    "Reaper",
]
