"""Exceptions raised by the store handle and the service layer."""


class ExerciseTrackerError(Exception):
    """Base class for application errors."""


class StoreUnavailableError(ExerciseTrackerError):
    """The database handle is closed or never managed to connect."""


class UserNotFoundError(ExerciseTrackerError):
    """No user exists for the given identifier."""

    def __init__(self, user_id: str):
        super().__init__(f"Could not find user {user_id!r}")
        self.user_id = user_id


class ExerciseValidationError(ExerciseTrackerError):
    """An exercise field could not be cast to its stored type."""

    def __init__(self, field: str, value):
        super().__init__(f"Invalid value for {field}: {value!r}")
        self.field = field
        self.value = value
