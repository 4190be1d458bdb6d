"""
Core dependencies resolving the acting user for route handlers
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fragfeed.database.supabase_client import get_supabase
from fragfeed.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_user_by_external_id(external_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Return the users row synced for an identity subject, or None"""
    result = supabase.table("users")\
        .select("*")\
        .eq("external_id", external_id)\
        .limit(1)\
        .execute()
    return result.data[0] if result.data else None


def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract identity info from JWT token"""
    return auth_service.get_current_user(credentials.credentials)


def get_current_user(
    identity: dict = Depends(get_current_identity),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Acting users row; required for every mutation"""
    try:
        user = get_user_by_external_id(identity["id"], supabase)
    except Exception as e:
        logger.error(f"Error resolving current user: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Can't get current user"
        )
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_supabase)
) -> Optional[dict]:
    """Acting users row for queries that also answer anonymous callers.

    No Authorization header means anonymous. A token that does not verify is
    still rejected with 401.
    """
    if credentials is None:
        return None
    identity = auth_service.get_current_user(credentials.credentials)
    try:
        return get_user_by_external_id(identity["id"], supabase)
    except Exception as e:
        logger.error(f"Error resolving current user: {e}")
        raise HTTPException(status_code=500, detail=str(e))
