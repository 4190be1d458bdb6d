import hashlib
import logging
import time
from supabase import Client
from fragfeed.database.supabase_client import SupabaseClient
from fragfeed.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Callable, Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


class AuthService:
    def __init__(self, supabase: Client, session_client_factory: Optional[Callable[[], Client]] = None):
        self.supabase = supabase
        # Sign-in state lives on the client, so each sign-in gets its own
        self._session_client_factory = session_client_factory or SupabaseClient.create_session_client

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new identity using Supabase Auth"""
        try:
            auth_response = self._session_client_factory().auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {"username": register_data.username}
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self._session_client_factory().auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get identity details from a Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = _cache_key(token)
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
            }
            _cache_user(cache_key, user_data, now)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Revoke the token's sessions and forget its cached identity"""
        _AUTH_USER_CACHE.pop(_cache_key(token), None)
        try:
            self._session_client_factory().auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Token revocation failed: {e}")
            return False


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cache_user(cache_key: str, user_data: Dict[str, Any], now: float) -> None:
    """Store a lookup, dropping expired entries and then the oldest ones when full"""
    if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
        for key in [k for k, (_, expiry) in _AUTH_USER_CACHE.items() if expiry <= now]:
            del _AUTH_USER_CACHE[key]
    while len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
        del _AUTH_USER_CACHE[next(iter(_AUTH_USER_CACHE))]
    _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()
