"""HelixGate engine errors."""


class HelixGateError(Exception):
    """Base error for HelixGate operations."""

    def __init__(self, message: str, code: str = "HELIXGATE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class SchemaInvalid(HelixGateError):
    """Request body is missing fields or has ill-typed ones."""

    def __init__(self, message: str = "Invalid request schema. Please check API documentation."):
        super().__init__(message, "JH-4001")


class DateRangeInvalid(HelixGateError):
    """Dates do not parse, or the range is inverted."""

    def __init__(self, message: str):
        super().__init__(message, "JH-4002")


class StoreFailure(HelixGateError):
    """The relational store could not complete the query.

    ``message`` is the public text; the underlying exception stays on
    ``__cause__`` and in the server log.
    """

    def __init__(self, message: str = "Internal server error occurred"):
        super().__init__(message, "JH-5001")


class AnimalNotFound(HelixGateError):
    """Animal does not exist in the registry."""

    def __init__(self, animal_id: int):
        super().__init__(f"Animal not found: {animal_id}", "ANIMAL_NOT_FOUND")
        self.animal_id = animal_id
