"""WebApp Auth Router: sign-in, sign-up, sign-out, current actor."""
from fastapi import APIRouter

from eventhub.auth import SignUpRequest
from eventhub.logging import get_logger
from eventhub.services.database import get_database

from .models import LoginRequest
from .serializers import profile_response

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["webapp-auth"])


def _session_response(session) -> dict:
    return {
        "authenticated": session.actor_id is not None,
        "loading": session.loading,
        "user_id": session.actor_id,
        "profile": profile_response(session.profile) if session.profile else None,
        "role": session.role.value if session.role else None,
        "dashboard": session.dashboard_route(),
    }


@router.post("/login")
async def login(request: LoginRequest):
    session = get_database().session
    await session.sign_in(request.email, request.password)
    return _session_response(session)


@router.post("/signup", status_code=201)
async def signup(request: SignUpRequest):
    await get_database().session.sign_up(request)
    return {"ok": True, "message": "Account created. Check your email to confirm, then sign in."}


@router.post("/logout")
async def logout():
    session = get_database().session
    await session.sign_out()
    return _session_response(session)


@router.get("/me")
async def me():
    return _session_response(get_database().session)


@router.get("/profile")
async def profile():
    """Signed-in actor's profile row; 404 when the signup trigger has not created it."""
    return profile_response(get_database().session.require_profile())
