"""ORM Models: SQLAlchemy declarative models.

All models imported here so Base.metadata is populated before
create_all runs.
"""

from hanoi_scores.models.score import Score  # noqa: F401
