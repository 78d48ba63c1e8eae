"""
Analytics services package.

Write-side maintenance jobs over the purchase graph. Read-only queries
live in ``apps.analytics.analytics``.
"""

from .backfill import backfill_home_ids

__all__ = [
    'backfill_home_ids',
]
