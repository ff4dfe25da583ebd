"""Score Store: the two blocking storage operations behind the scores resource.

Invariants:
    - Each function runs exactly one SQL statement on one checked-out session
    - insert_score uses INSERT ... RETURNING; id and creation_date come from the database
    - list_scores applies LIMIT only, no ORDER BY (engine scan order)
    - Called from WorkerPool threads, never on the event loop
"""

from sqlalchemy import insert, select

from hanoi_scores.infrastructure.database import DatabasePool
from hanoi_scores.models.score import Score
from hanoi_scores.schemas.score import ScoreCreate

SCORES_PAGE_SIZE = 20


def insert_score(pool: DatabasePool, new: ScoreCreate) -> Score:
    """Insert one score and return the fully populated row."""
    with pool.session("insert") as session:
        score = session.scalars(
            insert(Score).values(**new.model_dump()).returning(Score),
        ).one()
        session.commit()
        return score


def list_scores(pool: DatabasePool, limit: int = SCORES_PAGE_SIZE) -> list[Score]:
    """Return at most `limit` stored scores."""
    with pool.session("select") as session:
        return list(session.scalars(select(Score).limit(limit)).all())
