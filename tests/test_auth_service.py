"""Tests for authentication and session state."""

import pytest

from nutriflow.domain.errors import AuthError, RegistrationRejected, Unauthenticated
from nutriflow.services.auth import (
    AuthEvent,
    AuthService,
    SessionProvider,
    check_password,
    translate_auth_error,
)
from nutriflow.services.profiles import ProfileService
from tests.conftest import FakeAuthProvider, InMemoryProfileRepository


def _service(provider: FakeAuthProvider | None = None) -> AuthService:
    return AuthService(
        provider=provider or FakeAuthProvider(),
        profile_service=ProfileService(InMemoryProfileRepository()),
    )


def test_sign_up_creates_profile_and_session() -> None:
    service = _service()

    session = service.sign_up("bo@example.com", "abc123", "Bo", 1700)

    assert session is not None
    assert session.user.email == "bo@example.com"
    profile = service.profile_service.get_profile(session.user.id)
    assert profile.name == "Bo"
    assert profile.goals.calories == 1700


def test_service_keeps_no_session_between_calls() -> None:
    service = _service()

    first = service.sign_up("bo@example.com", "abc123", "Bo", 2000)
    second = service.sign_up("cy@example.com", "abc123", "Cy", 2000)

    assert first is not None
    assert second is not None
    assert first.access_token != second.access_token
    assert service.authenticate(first.access_token).email == "bo@example.com"
    assert service.authenticate(second.access_token).email == "cy@example.com"
    assert not hasattr(service, "current_session")


def test_session_provider_tracks_sign_up() -> None:
    sessions = SessionProvider(auth=_service())
    events: list[AuthEvent] = []
    sessions.subscribe(lambda event, _session: events.append(event))

    session = sessions.sign_up("bo@example.com", "abc123", "Bo", 1700)

    assert session is not None
    assert sessions.current_user == session.user
    assert events == [AuthEvent.SIGNED_IN]


def test_sign_up_pending_confirmation() -> None:
    sessions = SessionProvider(
        auth=_service(FakeAuthProvider(require_confirmation=True))
    )
    events: list[AuthEvent] = []
    sessions.subscribe(lambda event, _session: events.append(event))

    session = sessions.sign_up("bo@example.com", "abc123", "Bo", 2000)

    assert session is None
    assert sessions.current_session is None
    assert events == []
    with pytest.raises(Unauthenticated):
        sessions.require_user()


@pytest.mark.parametrize("password", ["ab1", "abcdefg", "1234567"])
def test_password_policy(password: str) -> None:
    with pytest.raises(RegistrationRejected):
        check_password(password)


def test_sign_up_duplicate_email_is_translated() -> None:
    service = _service()
    service.sign_up("bo@example.com", "abc123", "Bo", 2000)

    with pytest.raises(RegistrationRejected) as excinfo:
        service.sign_up("bo@example.com", "abc123", "Bo", 2000)
    assert excinfo.value.reason == "This email is already registered."


def test_sign_in_and_out() -> None:
    provider = FakeAuthProvider()
    sessions = SessionProvider(auth=_service(provider))
    sessions.sign_up("bo@example.com", "abc123", "Bo", 2000)
    sessions.sign_out()
    events: list[AuthEvent] = []
    unsubscribe = sessions.subscribe(lambda event, _session: events.append(event))

    session = sessions.sign_in("bo@example.com", "abc123")
    unsubscribe()
    sessions.sign_out()

    assert session.user.email == "bo@example.com"
    assert events == [AuthEvent.SIGNED_IN]
    assert sessions.current_session is None
    assert provider.signed_out == 2


def test_sign_in_with_wrong_password() -> None:
    service = _service()
    service.sign_up("bo@example.com", "abc123", "Bo", 2000)

    with pytest.raises(AuthError) as excinfo:
        service.sign_in("bo@example.com", "wrong1")
    assert excinfo.value.reason == "Incorrect email or password."
    assert not isinstance(excinfo.value, RegistrationRejected)


def test_authenticate_token() -> None:
    provider = FakeAuthProvider()
    service = _service(provider)
    session = service.sign_up("bo@example.com", "abc123", "Bo", 2000)
    assert session is not None

    assert service.authenticate(session.access_token) == session.user
    with pytest.raises(Unauthenticated):
        service.authenticate(None)
    with pytest.raises(Unauthenticated):
        service.authenticate("bogus")


def test_translate_unknown_message_passes_through() -> None:
    assert translate_auth_error("Something odd") == "Something odd"
