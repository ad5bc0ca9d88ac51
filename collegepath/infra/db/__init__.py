"""
Database infrastructure: engine/session wiring, ORM models and repositories.
"""
