"""
Service Errors

Exceptions raised by the service layer and translated to HTTP responses
by the routes.
"""


class NotFoundError(LookupError):
    """A referenced record does not exist or belongs to another user."""
    pass


class ValidationError(ValueError):
    """Submitted data is invalid (empty title, bad date, bad setting)."""
    pass
