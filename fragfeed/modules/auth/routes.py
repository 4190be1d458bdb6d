from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fragfeed.database.supabase_client import get_supabase, get_session_client_factory
from fragfeed.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
)
from fragfeed.modules.auth.service import AuthService
from fragfeed.core.dependencies import get_current_identity, get_optional_user
from supabase import Client
from typing import Callable, Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    session_client_factory: Callable[[], Client] = Depends(get_session_client_factory),
) -> AuthService:
    return AuthService(supabase, session_client_factory)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new identity; the users row follows via the identity webhook"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and revoke the token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_me(
    identity: Dict = Depends(get_current_identity),
    user: Optional[Dict] = Depends(get_optional_user),
):
    """Current identity plus whether its users row has been synced yet"""
    return {**identity, "synced": user is not None, "user_id": user["id"] if user else None}
