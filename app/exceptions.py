from typing import List, Optional


class StorefrontError(Exception):
    """Base class for every recoverable storefront error."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Checkout input is incomplete. Nothing was mutated."""

    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


class PersistenceError(StorefrontError):
    """The order store rejected or failed to save an order."""

    status_code = 502

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class NotFoundError(StorefrontError):
    status_code = 404

    def __init__(self, resource: str, identifier):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.identifier = identifier


class InvalidStatusTransition(StorefrontError):
    def __init__(self, current: str, new: str):
        super().__init__(f"Invalid status change from {current} → {new}")
        self.current = current
        self.new = new
