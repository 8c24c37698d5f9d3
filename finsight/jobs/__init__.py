# finsight/jobs/__init__.py
"""
Background jobs.

- price_updater: periodic price simulation and alert sweep
"""

from finsight.jobs.price_updater import PriceUpdaterJob, PriceUpdaterRun

__all__ = [
    "PriceUpdaterJob",
    "PriceUpdaterRun",
]
