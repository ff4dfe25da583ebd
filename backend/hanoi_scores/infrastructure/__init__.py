"""Infrastructure Layer: connection pool, worker pool, logging.

Invariants:
    - Infrastructure never imports from api/
    - All SQLAlchemy exceptions mapped to StorageError before leaving this layer
"""
