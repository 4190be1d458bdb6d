from pydantic import BaseModel


class VoteCounts(BaseModel):
    upvotes: int
    downvotes: int
    total: int


class VoteStatus(BaseModel):
    upvoted: bool
    downvoted: bool


class VoteToggleResponse(BaseModel):
    active: bool
