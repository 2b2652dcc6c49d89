"""Settlement Pydantic schemas."""

from uuid import UUID

from pydantic import Field

from schemas.common import BaseSchema


class TeamPlacement(BaseSchema):
    """Final placement of a team. Extra keys from the caller are ignored."""

    position: int = Field(ge=1, description="1-based finishing position")


class ResolveBetsRequest(BaseSchema):
    """Final results used to settle a hackathon's pending bets."""

    winner_results: dict[UUID, TeamPlacement] = Field(
        description="Team id -> placement; absent teams did not place",
    )


class BetSettlementError(BaseSchema):
    """A bet that could not be settled in this run."""

    bet_id: UUID
    error: str


class ResolveBetsResponse(BaseSchema):
    """Settlement run report."""

    success: bool
    resolved_count: int
    total_payout: int
    errors: list[BetSettlementError] = Field(default_factory=list)
    message: str = ""
