"""Error types shared across the application."""


class NutriFlowError(Exception):
    """Base class for expected application failures."""


class ValidationError(NutriFlowError):
    """A field value was rejected."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class MissingField(ValidationError):
    """A required field was absent or blank."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"{field} is required")


class OutOfRange(ValidationError):
    """A numeric field fell outside its allowed range."""

    def __init__(self, field: str, minimum: int, maximum: int | None) -> None:
        if maximum is None:
            message = f"{field} must be at least {minimum}"
        else:
            message = f"{field} must be between {minimum} and {maximum}"
        super().__init__(field, message)
        self.minimum = minimum
        self.maximum = maximum


class MalformedResponse(NutriFlowError):
    """The AI backend returned text that holds no JSON object."""

    def __init__(self, raw_text: str) -> None:
        super().__init__("Could not extract valid JSON from the response.")
        self.raw_text = raw_text


class NoFoodRecognized(NutriFlowError):
    """The AI backend reported that the input contains no food."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthenticated(NutriFlowError):
    """No authenticated session is available."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class NotFound(NutriFlowError):
    """A record does not exist for the current user."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class AuthError(NutriFlowError):
    """Sign-in or sign-up failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class RegistrationRejected(AuthError):
    """Sign-up input was refused by the password policy or the provider."""
