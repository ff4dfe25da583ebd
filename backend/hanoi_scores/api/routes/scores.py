"""Scores Resource: list and create game results.

Invariants:
    - One path, two verbs: GET lists, POST creates
    - Request bodies validated by Pydantic before the handler runs
    - Every storage call goes through WorkerPool.run (never on the event loop)
    - StorageError propagates to the global handler (500, plain text)
"""

import logging

from fastapi import APIRouter, Depends, status

from hanoi_scores.infrastructure.database import DatabasePool, get_database
from hanoi_scores.infrastructure.workers import WorkerPool, get_workers
from hanoi_scores.schemas.score import ScoreCreate, ScoreResponse
from hanoi_scores.services import score_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/hanoi/api/v1/scores", tags=["scores"])


@router.get("", response_model=list[ScoreResponse])
async def get_scores(
    db: DatabasePool = Depends(get_database),
    workers: WorkerPool = Depends(get_workers),
):
    """List up to 20 stored scores (unordered)."""
    scores = await workers.run(score_store.list_scores, db)
    return [ScoreResponse.model_validate(s) for s in scores]


@router.post(
    "", response_model=ScoreResponse, status_code=status.HTTP_200_OK,
)
async def add_score(
    body: ScoreCreate,
    db: DatabasePool = Depends(get_database),
    workers: WorkerPool = Depends(get_workers),
):
    """Persist a new score and return it with its generated id and date."""
    score = await workers.run(score_store.insert_score, db, body)
    logger.info(f"Score {score.id} recorded for player {score.player!r}")
    return ScoreResponse.model_validate(score)
