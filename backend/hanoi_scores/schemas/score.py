"""Score Schemas: request/response contracts for the scores resource.

Invariants:
    - ScoreCreate carries only client-supplied fields; id and creation_date
      are rejected as extra fields
    - Integer fields are 32-bit (INTEGER columns); no other range or length checks
    - ScoreResponse field order: id, player, n_turn, median_time, disks, creation_date
    - creation_date rendered with the naive datetime's default text format
      ("YYYY-MM-DD HH:MM:SS[.ffffff]"), not ISO-8601
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Width of the INTEGER columns the values are stored in
Int32 = Annotated[int, Field(ge=-2**31, le=2**31 - 1)]


class ScoreCreate(BaseModel):
    """New score submitted by a client."""
    model_config = ConfigDict(extra="forbid")

    player: str
    n_turn: Int32
    disks: Int32
    median_time: Int32


class ScoreResponse(BaseModel):
    """Persisted score as returned by list and create."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    player: str
    n_turn: int
    median_time: int
    disks: int
    creation_date: str

    @field_validator("creation_date", mode="before")
    @classmethod
    def render_creation_date(cls, v):
        if isinstance(v, datetime):
            return str(v)
        return v
