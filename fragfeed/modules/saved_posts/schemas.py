from datetime import datetime
from fragfeed.modules.posts.schemas import PostResponse


class SavedPostResponse(PostResponse):
    saved_at: datetime
