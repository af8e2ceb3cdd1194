"""Supabase Auth implementation of the session provider."""

from dataclasses import dataclass

from supabase import AuthError as SupabaseAuthError
from supabase import Client

from nutriflow.services.auth import (
    AuthProvider,
    AuthSession,
    AuthUser,
    ProviderAuthError,
)


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Email/password authentication backed by Supabase Auth."""

    client: Client

    def sign_up(
        self, email: str, password: str, name: str
    ) -> tuple[AuthUser, AuthSession | None]:
        """Register a user with their display name as metadata."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"name": name}},
                }
            )
        except SupabaseAuthError as exc:
            raise ProviderAuthError(exc.message) from exc
        if response.user is None:
            raise ProviderAuthError("Sign up did not return a user")
        user = _to_user(response.user)
        return user, _to_session(user, response.session)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except SupabaseAuthError as exc:
            raise ProviderAuthError(exc.message) from exc
        if response.user is None or response.session is None:
            raise ProviderAuthError("Invalid login credentials")
        user = _to_user(response.user)
        session = _to_session(user, response.session)
        if session is None:
            raise ProviderAuthError("Invalid login credentials")
        return session

    def sign_out(self) -> None:
        """Sign out of the current Supabase session."""
        self.client.auth.sign_out()

    def get_user(self, access_token: str) -> AuthUser | None:
        """Resolve an access token through Supabase Auth."""
        try:
            response = self.client.auth.get_user(access_token)
        except SupabaseAuthError as exc:
            raise ProviderAuthError(exc.message) from exc
        if response is None or response.user is None:
            return None
        return _to_user(response.user)


def _to_user(user: object) -> AuthUser:
    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


def _to_session(user: AuthUser, session: object | None) -> AuthSession | None:
    if session is None:
        return None
    return AuthSession(
        user=user,
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
    )
