"""
Domain errors raised by the engine services.

Taxonomy:
- not found for the common "no match" case is an explicit ``None`` or empty
  list, never an exception; ``NotFoundError`` is only for lookups by id
- ``CatalogUnavailableError``: the remote nutrition catalog failed (transport,
  non-2xx, circuit open); ``CatalogDecodeError`` for a malformed payload
- ``InvalidPreconditionError``: the caller asked for something the current
  state does not allow; nothing was changed
- ``StoreWriteError``: a user-initiated write could not be persisted and may
  be retried
"""


class IronLogError(Exception):
    """Base class for every error the engine raises on purpose."""


class NotFoundError(IronLogError):
    def __init__(self, entity: str, identifier):
        super().__init__(f"{entity} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class InvalidPreconditionError(IronLogError):
    pass


class NoActiveWorkoutError(InvalidPreconditionError):
    def __init__(self):
        super().__init__("No active workout session")


class WorkoutAlreadyCompletedError(InvalidPreconditionError):
    def __init__(self, workout_id: str):
        super().__init__(f"Workout {workout_id} is already completed")
        self.workout_id = workout_id


class InvalidSetDataError(InvalidPreconditionError):
    pass


class CatalogUnavailableError(IronLogError):
    pass


class CatalogDecodeError(CatalogUnavailableError):
    pass


class StoreWriteError(IronLogError):
    pass
