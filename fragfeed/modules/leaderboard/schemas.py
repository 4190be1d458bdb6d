from fragfeed.modules.posts.schemas import PostResponse


class TopPostResponse(PostResponse):
    score: int
