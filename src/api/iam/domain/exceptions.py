"""Domain exceptions for IAM bounded context."""


class InvalidFilterError(ValueError):
    """Raised when a mapping filter expression cannot be parsed.

    Covers malformed syntax as well as fields or operators outside the
    supported set. Raised before any storage access takes place.
    """

    def __init__(self, message: str, expression: str | None = None):
        super().__init__(message)
        self.expression = expression
