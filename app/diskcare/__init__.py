"""diskcare - Explainable cleanup of disk caches and temp directories.

Inventories known cache and temp locations, estimates reclaimable space,
applies a risk policy, and records every run in an append-only log.
"""

__version__ = "0.2.0"
