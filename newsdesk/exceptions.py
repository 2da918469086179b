"""
Application error type and helpers for common error patterns.

Services raise AppError with a status code and a list of messages; the
handlers registered in server.py turn them into the response envelope.
"""

from typing import TypeVar

T = TypeVar("T")


class AppError(Exception):
    """An error that maps directly to an HTTP status and envelope."""

    def __init__(self, message: str, status_code: int, errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors if errors else [message]

    @classmethod
    def bad_request(cls, message: str, errors: list[str] | None = None) -> "AppError":
        return cls(message, 400, errors)

    @classmethod
    def unauthorized(cls, message: str) -> "AppError":
        return cls(message, 401)

    @classmethod
    def forbidden(cls, message: str) -> "AppError":
        return cls(message, 403)

    @classmethod
    def not_found(cls, message: str) -> "AppError":
        return cls(message, 404)

    @classmethod
    def conflict(cls, message: str) -> "AppError":
        return cls(message, 409)


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        article = require_resource(db.get_article(id), "Article not found")
    """
    if resource is None:
        raise AppError.not_found(detail)
    return resource


def require_article(article: T | None) -> T:
    """Raise 404 if article is None."""
    return require_resource(article, "Article not found")
