"""Domain-specific exceptions — framework-independent."""


class UnauthenticatedError(Exception):
    """Raised when an action needs a signed-in user and there is none."""

    def __init__(self, action: str = "this action", message: str | None = None):
        self.action = action
        super().__init__(message or f"Sign in required for {action}")


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RemoteOperationFailedError(Exception):
    """Raised when a call to the hosted data/auth service fails.

    ``status_code`` is 0 when the request never produced a response
    (connection refused, timeout, ...).
    """

    def __init__(self, operation: str, collection: str, status_code: int, message: str):
        self.operation = operation
        self.collection = collection
        self.status_code = status_code
        self.message = message
        super().__init__(f"{operation} on '{collection}' failed [{status_code}]: {message}")


class ValidationFailedError(Exception):
    """Raised before any request is sent when required input is missing."""

    def __init__(self, fields: list[str], message: str | None = None):
        self.fields = fields
        super().__init__(message or f"Missing required field(s): {', '.join(fields)}")


class ToggleInFlightError(Exception):
    """Raised when a toggle for the same (article, user) pair is already pending."""

    def __init__(self, article_id: str, user_id: str):
        self.article_id = article_id
        self.user_id = user_id
        super().__init__(
            f"A like toggle for article '{article_id}' by user '{user_id}' is already in flight"
        )
