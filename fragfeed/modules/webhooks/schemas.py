from pydantic import BaseModel
from fragfeed.modules.users.schemas import IdentityUserData


class IdentityEvent(BaseModel):
    type: str
    data: IdentityUserData


class IdentityEventResult(BaseModel):
    type: str
    handled: bool
