"""Vote-related endpoints for the GeoSnap API."""

from fastapi import APIRouter, Query, status

from geosnap_stage.api.v1.dependencies import SessionDep, http_error
from geosnap_stage.models import Vote
from geosnap_stage.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse
from geosnap_stage.services.errors import StageError
from geosnap_stage.services.targets import target_from_ids
from geosnap_stage.services.votes import VoteLedger

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
def cast_vote(vote_data: VoteCreate, db: SessionDep) -> Vote:
    """Cast or change a vote on a picture or comment."""
    try:
        target = target_from_ids(vote_data.picture_id, vote_data.comment_id)
        return VoteLedger(db).cast(vote_data.user_id, target, vote_data.vote_type)
    except StageError as exc:
        raise http_error(exc) from exc


@router.get("/mine", response_model=MyVoteResponse)
def get_my_vote(
    db: SessionDep,
    user_id: int = Query(...),
    picture_id: int | None = Query(None),
    comment_id: int | None = Query(None),
) -> MyVoteResponse:
    """Get a user's current vote on a picture or comment."""
    try:
        target = target_from_ids(picture_id, comment_id)
    except StageError as exc:
        raise http_error(exc) from exc

    vote = VoteLedger(db).get_user_vote(user_id, target)
    if vote is None:
        return MyVoteResponse()
    return MyVoteResponse(vote_type=vote.vote_type)
