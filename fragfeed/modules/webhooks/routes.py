import hmac
import logging
from fastapi import APIRouter, Depends, Header, HTTPException, status
from fragfeed.config import settings
from fragfeed.database.supabase_client import get_service_supabase
from fragfeed.modules.users.service import UserService
from fragfeed.modules.webhooks.schemas import IdentityEvent, IdentityEventResult
from supabase import Client
from typing import Optional

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

UPSERT_EVENTS = {"user.created", "user.updated"}
DELETE_EVENTS = {"user.deleted"}


def get_webhook_user_service(supabase: Client = Depends(get_service_supabase)) -> UserService:
    return UserService(supabase)


def verify_webhook_secret(x_webhook_secret: Optional[str] = Header(None)) -> None:
    """Reject calls that do not carry the shared identity webhook secret"""
    expected = settings.identity_webhook_secret
    if not expected:
        logger.error("Identity webhook called but IDENTITY_WEBHOOK_SECRET is not configured")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Webhook not configured")
    if not x_webhook_secret or not hmac.compare_digest(x_webhook_secret, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook secret")


@router.post("/identity", response_model=IdentityEventResult, dependencies=[Depends(verify_webhook_secret)])
async def identity_webhook(
    event: IdentityEvent,
    service: UserService = Depends(get_webhook_user_service)
):
    """Keep users rows in step with the identity provider"""
    if event.type in UPSERT_EVENTS:
        service.upsert_from_identity(event.data)
        logger.info(f"Synced user for identity {event.data.id} ({event.type})")
        return IdentityEventResult(type=event.type, handled=True)
    if event.type in DELETE_EVENTS:
        service.delete_from_identity(event.data.id)
        logger.info(f"Removed user for identity {event.data.id}")
        return IdentityEventResult(type=event.type, handled=True)
    logger.info(f"Ignored identity webhook event {event.type}")
    return IdentityEventResult(type=event.type, handled=False)
