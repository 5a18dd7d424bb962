"""
GraphQL errors carrying a machine-readable ``extensions.code``
"""

from graphql import GraphQLError
from pydantic import ValidationError

from ..database.store import DocumentValidationError


class UnauthenticatedError(GraphQLError):
    def __init__(self, message: str = "User is not authenticated"):
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})


class BadUserInputError(GraphQLError):
    def __init__(self, message: str):
        super().__init__(message, extensions={"code": "BAD_USER_INPUT"})


class NotFoundError(GraphQLError):
    def __init__(self, message: str):
        super().__init__(message, extensions={"code": "NOT_FOUND"})


class UpstreamUnavailableError(GraphQLError):
    def __init__(self, message: str):
        super().__init__(message, extensions={"code": "UPSTREAM_UNAVAILABLE"})


def bad_user_input(model: str, error: ValidationError | DocumentValidationError) -> BadUserInputError:
    """Re-classify a document validation failure as a BAD_USER_INPUT error."""
    if isinstance(error, ValidationError):
        error = DocumentValidationError.from_pydantic(model, error)
    return BadUserInputError(str(error))
