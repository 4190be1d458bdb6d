import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from fragfeed.config import settings
from fragfeed.modules.auth import routes as auth_routes
from fragfeed.modules.users import routes as users_routes
from fragfeed.modules.webhooks import routes as webhooks_routes
from fragfeed.modules.subreddits import routes as subreddits_routes
from fragfeed.modules.posts import routes as posts_routes
from fragfeed.modules.comments import routes as comments_routes
from fragfeed.modules.votes import routes as votes_routes
from fragfeed.modules.follows import routes as follows_routes
from fragfeed.modules.notifications import routes as notifications_routes
from fragfeed.modules.saved_posts import routes as saved_posts_routes
from fragfeed.modules.media import routes as media_routes
from fragfeed.modules.leaderboard import routes as leaderboard_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api/v1"

for module_routes in (
    auth_routes,
    users_routes,
    webhooks_routes,
    subreddits_routes,
    posts_routes,
    comments_routes,
    votes_routes,
    follows_routes,
    notifications_routes,
    saved_posts_routes,
    media_routes,
    leaderboard_routes,
):
    app.include_router(module_routes.router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup ({settings.environment})")
    if not settings.supabase_url:
        logger.warning("SUPABASE_URL is not set; requests touching the database will fail")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to FragFeed", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: reports ready once the routers are mounted."""
    return {"status": "ready"}
