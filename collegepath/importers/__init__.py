"""
Reference data importers. Each import is an idempotent upsert keyed by the
source's own id.
"""
