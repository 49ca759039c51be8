from pydantic import BaseModel, Field
from typing import Literal


class PrecomputationIn(BaseModel):
    normalizedAddress1: str
    normalizedAddress2: str
    levenshteinDistance: int = Field(..., ge=0)


class VerifyRequest(BaseModel):
    # Optional here so a missing field is a 400 from the handler, not a 422.
    address1: str | None = None
    address2: str | None = None
    precomputation: PrecomputationIn | None = None


class VerdictOut(BaseModel):
    areSame: bool
    reasoning: str


class PrecomputationOut(PrecomputationIn):
    similarity: float


class BroadcastOut(BaseModel):
    ok: bool
    status_code: int | None = None
    error: str | None = None


class SessionOut(BaseModel):
    state: Literal["idle", "in_flight", "succeeded", "failed"]
    result: VerdictOut | None = None
    error: str | None = None
    precomputation: PrecomputationOut | None = None
    broadcast: BroadcastOut | None = None


class HealthOut(BaseModel):
    status: str
    oracle_mode: str
    oracle_configured: bool
