"""Authentication and session lifecycle."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from nutriflow.domain.errors import AuthError, RegistrationRejected, Unauthenticated
from nutriflow.services.profiles import ProfileService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

_AUTH_MESSAGES: tuple[tuple[str, str], ...] = (
    ("Invalid login credentials", "Incorrect email or password."),
    ("Email not confirmed", "Confirm your email before signing in."),
    ("already registered", "This email is already registered."),
    ("valid email", "Enter a valid email address."),
    (
        "Password should be at least",
        f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
    ),
    ("Too many requests", "Too many attempts. Try again shortly."),
)


@dataclass(frozen=True)
class AuthUser:
    """Authenticated user identity."""

    id: str
    email: str | None


@dataclass(frozen=True)
class AuthSession:
    """Issued session tokens for a user."""

    user: AuthUser
    access_token: str
    refresh_token: str | None = None


class AuthEvent(StrEnum):
    """Session change notifications."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthListener = Callable[[AuthEvent, AuthSession | None], None]


class ProviderAuthError(Exception):
    """Raised by auth providers with the provider's raw message."""


class AuthProvider(Protocol):
    """Interface for the hosted authentication backend."""

    def sign_up(
        self, email: str, password: str, name: str
    ) -> tuple[AuthUser, AuthSession | None]:
        """Register a user; session is None while email confirmation is pending."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""

    def sign_out(self) -> None:
        """End the provider session."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Resolve an access token to its user."""


def translate_auth_error(message: str) -> str:
    """Map a provider error message to user-facing text."""
    for marker, friendly in _AUTH_MESSAGES:
        if marker in message:
            return friendly
    return message

def check_password(password: str) -> None:
    """Enforce the minimum password policy."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise RegistrationRejected(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        raise RegistrationRejected(
            "Password must contain at least one letter and one number."
        )


@dataclass
class AuthService:
    """Stateless account operations shared by every request.

    Sessions are returned to the caller and never stored here, so one
    instance can serve many users.
    """

    provider: AuthProvider
    profile_service: ProfileService

    def sign_up(
        self, email: str, password: str, name: str, calories_goal: int
    ) -> AuthSession | None:
        """Register a user and create their profile.

        Returns the new session, or None when the provider requires email
        confirmation before the first sign-in.
        """
        check_password(password)
        try:
            user, session = self.provider.sign_up(email, password, name)
        except ProviderAuthError as exc:
            raise RegistrationRejected(translate_auth_error(str(exc))) from exc
        self.profile_service.create_profile(user.id, name, calories_goal)
        logger.info("Registered user %s", user.id)
        return session

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange email and password for a session."""
        try:
            return self.provider.sign_in(email, password)
        except ProviderAuthError as exc:
            raise AuthError(translate_auth_error(str(exc))) from exc

    def authenticate(self, access_token: str | None) -> AuthUser:
        """Resolve a bearer token to a user or raise Unauthenticated."""
        if not access_token:
            raise Unauthenticated()
        try:
            user = self.provider.get_user(access_token)
        except ProviderAuthError as exc:
            raise Unauthenticated(translate_auth_error(str(exc))) from exc
        if user is None:
            raise Unauthenticated()
        return user


@dataclass
class SessionProvider:
    """Single-user session holder for client code; notifies listeners on change."""

    auth: AuthService
    _session: AuthSession | None = field(default=None, init=False)
    _listeners: list[AuthListener] = field(default_factory=list, init=False)

    @property
    def current_session(self) -> AuthSession | None:
        """Return the active session, if any."""
        return self._session

    @property
    def current_user(self) -> AuthUser | None:
        """Return the signed-in user, if any."""
        return self._session.user if self._session else None

    def require_user(self) -> AuthUser:
        """Return the signed-in user or raise Unauthenticated."""
        if self._session is None:
            raise Unauthenticated()
        return self._session.user

    def sign_up(
        self, email: str, password: str, name: str, calories_goal: int
    ) -> AuthSession | None:
        """Register and keep the session when one is issued right away."""
        session = self.auth.sign_up(email, password, name, calories_goal)
        if session is not None:
            self._set_session(AuthEvent.SIGNED_IN, session)
        return session

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in and keep the session."""
        session = self.auth.sign_in(email, password)
        self._set_session(AuthEvent.SIGNED_IN, session)
        return session

    def sign_out(self) -> None:
        """Sign out and clear the current session."""
        self.auth.provider.sign_out()
        self._set_session(AuthEvent.SIGNED_OUT, None)

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a session change listener and return its unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_session(self, event: AuthEvent, session: AuthSession | None) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(event, session)
