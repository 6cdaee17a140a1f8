"""Session/profile resolver backed by Supabase auth.

One resolver per client process: it owns the signed-in auth user and the
profile row that carries the actor's role. Cart and checkout receive it
explicitly instead of looking the session up globally.
"""
from typing import Any, Optional

from pydantic import BaseModel, model_validator
from supabase._async.client import AsyncClient

from eventhub.errors import PermissionDenied, ProfileNotFound, RemoteOperationFailed, Unauthenticated
from eventhub.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from eventhub.services.models import Profile, Role
from eventhub.services.repositories import ProfileRepository

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6

LOGIN_ROUTE = "/login"
DASHBOARD_ROUTES = {
    Role.ADMIN: "/admin/dashboard",
    Role.VENDOR: "/vendor/dashboard",
    Role.USER: "/user/dashboard",
}


class SignUpRequest(BaseModel):
    """Sign-up form. Admin accounts cannot be self-registered."""
    email: str
    password: str
    confirm_password: str
    full_name: str
    role: Role = Role.USER
    business_name: Optional[str] = None

    @model_validator(mode="after")
    def check_form(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self.role == Role.ADMIN:
            raise ValueError("Role must be user or vendor")
        if self.role == Role.VENDOR and not (self.business_name or "").strip():
            raise ValueError("Business name is required for vendors")
        return self

    def user_metadata(self) -> dict[str, Any]:
        """Data for the profile-creating signup trigger."""
        data: dict[str, Any] = {"full_name": self.full_name, "role": self.role.value}
        if self.role == Role.VENDOR:
            data["business_name"] = self.business_name
        return data


def dashboard_route(profile: Optional[Profile]) -> str:
    """Where a profile lands after sign-in."""
    if profile is None:
        return LOGIN_ROUTE
    return DASHBOARD_ROUTES.get(profile.role, DASHBOARD_ROUTES[Role.USER])


class SessionResolver:
    """Current actor, its profile, and a loading flag."""

    def __init__(self, client: AsyncClient, profiles: Optional[ProfileRepository] = None):
        self.client = client
        self.profiles = profiles or ProfileRepository(client)
        self.user: Any = None
        self.profile: Optional[Profile] = None
        self.loading = True

    @property
    def actor_id(self) -> Optional[str]:
        return str(self.user.id) if self.user is not None else None

    @property
    def role(self) -> Optional[Role]:
        return self.profile.role if self.profile else None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_vendor(self) -> bool:
        return self.role == Role.VENDOR

    @property
    def is_user(self) -> bool:
        return self.role == Role.USER

    def dashboard_route(self) -> str:
        return dashboard_route(self.profile)

    async def restore(self) -> None:
        """Pick up an existing auth session (if any) and its profile."""
        try:
            session = await self.client.auth.get_session()
            if session and session.user:
                self.user = session.user
                self.profile = await self.fetch_profile(self.actor_id)
        except Exception as e:
            logger.error(f"Error fetching session: {e}")
            self.user = None
            self.profile = None
        finally:
            self.loading = False

    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        """Profile row for `user_id`; None if missing or the read fails."""
        try:
            return await self.profiles.get_by_id(user_id)
        except Exception as e:
            logger.error(f"Error fetching profile {sanitize_id_for_logging(user_id)}: {e}")
            return None

    async def sign_in(self, email: str, password: str) -> Optional[Profile]:
        """
        Password sign-in.

        Raises:
            Unauthenticated: credentials rejected
        """
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.warning(f"Sign-in failed for {sanitize_string_for_logging(email)}: {e}")
            raise Unauthenticated(str(e) or None) from e

        if response.user is None:
            raise Unauthenticated()

        self.user = response.user
        self.profile = await self.fetch_profile(self.actor_id)
        self.loading = False
        logger.info(f"Signed in {sanitize_id_for_logging(self.actor_id)} as {self.role.value if self.role else 'no profile'}")
        return self.profile

    async def sign_up(self, request: SignUpRequest) -> Any:
        """Register an account; the backend trigger creates the profile row."""
        try:
            response = await self.client.auth.sign_up(
                {
                    "email": request.email,
                    "password": request.password,
                    "options": {"data": request.user_metadata()},
                }
            )
        except Exception as e:
            logger.warning(f"Sign-up failed for {sanitize_string_for_logging(request.email)}: {e}")
            raise RemoteOperationFailed(e, message=str(e) or None) from e
        logger.info(f"Signed up {sanitize_string_for_logging(request.email)} as {request.role.value}")
        return response

    async def sign_out(self) -> None:
        try:
            await self.client.auth.sign_out()
        finally:
            self.user = None
            self.profile = None

    def require_actor(self) -> str:
        if self.actor_id is None:
            raise Unauthenticated()
        return self.actor_id

    def require_profile(self) -> Profile:
        self.require_actor()
        if self.profile is None:
            raise ProfileNotFound()
        return self.profile

    def require_role(self, role: Role) -> Profile:
        """
        Raises:
            Unauthenticated: nobody signed in
            ProfileNotFound: signed in but the profile row is missing
            PermissionDenied: signed in with another role
        """
        self.require_profile()
        if self.profile.role != role:
            raise PermissionDenied()
        return self.profile
