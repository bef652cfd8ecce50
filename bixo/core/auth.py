"""
Auth service: session state for the UI.

Holds the signed-in user, turns login / registration responses into a stored
token pair, and tells the UI where each user type lands after signing in.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from bixo.core.api import ApiClient
from bixo.core.envelope import ApiResponse
from bixo.models.schemas import AuthResponse, UserResponse, UserType

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
CANDIDATE_ONBOARDING_PATH = "/candidate/onboard"

HOME_PATHS: dict[UserType, str] = {
    UserType.CANDIDATE: "/candidate/dashboard",
    UserType.COMPANY: "/company/dashboard",
    UserType.ADMIN: "/admin/dashboard",
}


@dataclass
class AuthResult:
    success: bool
    error: Optional[str] = None
    redirect: Optional[str] = None


def home_path(user_type: UserType) -> str:
    return HOME_PATHS.get(user_type, LOGIN_PATH)


class AuthService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.user: Optional[UserResponse] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def check_auth(self) -> Optional[UserResponse]:
        """Load the current user from /auth/me; None when not signed in."""
        response = self.api.get("/auth/me").cast(UserResponse.model_validate)
        self.user = response.data if response.success and response.data else None
        return self.user

    def login(self, email: str, password: str) -> AuthResult:
        response = self.api.post("/auth/login", {"email": email, "password": password})
        auth = self._start_session(response)
        if auth is None:
            return AuthResult(success=False, error=response.error or "Login failed")
        logger.info("Signed in as %s (%s)", auth.email, auth.user_type.name.lower())
        return AuthResult(success=True, redirect=home_path(auth.user_type))

    def register_candidate(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> AuthResult:
        response = self.api.post("/auth/register/candidate", {
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
        })
        if self._start_session(response) is None:
            return AuthResult(success=False, error=response.error or "Registration failed")
        return AuthResult(success=True, redirect=CANDIDATE_ONBOARDING_PATH)

    def register_company(
        self, email: str, password: str, company_name: str, industry: str
    ) -> AuthResult:
        response = self.api.post("/auth/register/company", {
            "email": email,
            "password": password,
            "companyName": company_name,
            "industry": industry,
        })
        if self._start_session(response) is None:
            return AuthResult(success=False, error=response.error or "Registration failed")
        return AuthResult(success=True, redirect=home_path(UserType.COMPANY))

    def logout(self) -> AuthResult:
        self.api.clear_tokens()
        self.user = None
        return AuthResult(success=True, redirect=LOGIN_PATH)

    def _start_session(self, response: ApiResponse) -> Optional[AuthResponse]:
        """Store the token pair from an auth response and load the user."""
        if not response.success or not response.data:
            return None
        parsed = response.cast(AuthResponse.model_validate)
        if not parsed.success:
            return None
        auth: AuthResponse = parsed.data
        self.api.set_tokens(auth.access_token, auth.refresh_token, auth.expires_at)
        self.check_auth()
        return auth
