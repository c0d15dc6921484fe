"""Custom exception hierarchy for LiteBlog."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Article errors
    ARTICLE_NOT_FOUND = "ARTICLE_NOT_FOUND"
    SLUG_EXISTS = "SLUG_EXISTS"
    INVALID_SLUG = "INVALID_SLUG"

    # Comment errors
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    PARENT_COMMENT_NOT_FOUND = "PARENT_COMMENT_NOT_FOUND"

    # User errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Auth & rate limiting
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN = "FORBIDDEN"
    RATE_LIMITED = "RATE_LIMITED"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class BlogException(Exception):
    """
    Base exception for all LiteBlog errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            status_code: HTTP status code to return
            details: Optional additional context/details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON response.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class ArticleNotFoundError(BlogException):
    """Article does not exist, or the viewer is not allowed to know it exists.

    Both cases carry the same message so a hidden article cannot be told
    apart from a missing one.
    """

    def __init__(self, identifier: Any = None):
        details = {"article": str(identifier)} if identifier is not None else {}
        super().__init__(
            "Article not found",
            ErrorCode.ARTICLE_NOT_FOUND,
            status_code=404,
            details=details
        )


class SlugExistsError(BlogException):
    """Another article already uses this slug."""

    def __init__(self, slug: str):
        super().__init__(
            f"Slug already exists: {slug}",
            ErrorCode.SLUG_EXISTS,
            status_code=409,
            details={"slug": slug}
        )


class InvalidSlugError(BlogException):
    """Slug is empty or contains characters outside [a-z0-9-]."""

    def __init__(self, slug: str):
        super().__init__(
            "Invalid slug format",
            ErrorCode.INVALID_SLUG,
            status_code=400,
            details={"slug": slug}
        )


class CommentNotFoundError(BlogException):
    """Comment not found in database."""

    def __init__(self, comment_id: int):
        super().__init__(
            f"Comment not found: {comment_id}",
            ErrorCode.COMMENT_NOT_FOUND,
            status_code=404,
            details={"comment_id": comment_id}
        )


class ParentCommentNotFoundError(BlogException):
    """Reply target does not exist or belongs to another article."""

    def __init__(self, parent_id: int):
        super().__init__(
            f"Parent comment not found: {parent_id}",
            ErrorCode.PARENT_COMMENT_NOT_FOUND,
            status_code=400,
            details={"parent_id": parent_id}
        )


class UserNotFoundError(BlogException):
    """User not found in database."""

    def __init__(self, user_id: Any):
        super().__init__(
            f"User not found: {user_id}",
            ErrorCode.USER_NOT_FOUND,
            status_code=404,
            details={"user_id": user_id}
        )


class RoleNotFoundError(BlogException):
    """Role code is not one of the seeded roles."""

    def __init__(self, role_code: str):
        super().__init__(
            f"Role not found: {role_code}",
            ErrorCode.ROLE_NOT_FOUND,
            status_code=404,
            details={"role": role_code}
        )


class EmailExistsError(BlogException):
    """Email address is already registered."""

    def __init__(self, email: str):
        super().__init__(
            "Email already registered",
            ErrorCode.EMAIL_EXISTS,
            status_code=409,
            details={"email": email}
        )


class ValidationError(BlogException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class AuthenticationError(BlogException):
    """Request lacks valid authentication credentials."""

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class InvalidTokenError(BlogException):
    """Email verification token is unknown or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(
            message,
            ErrorCode.INVALID_TOKEN,
            status_code=400,
        )


class AccountDisabledError(BlogException):
    """User account has been disabled by an administrator."""

    def __init__(self, message: str = "Account is disabled"):
        super().__init__(
            message,
            ErrorCode.ACCOUNT_DISABLED,
            status_code=403,
        )


class EmailNotVerifiedError(BlogException):
    """Action requires a verified email address."""

    def __init__(self, message: str = "Please verify your email before performing this action"):
        super().__init__(
            message,
            ErrorCode.EMAIL_NOT_VERIFIED,
            status_code=403,
        )


class ForbiddenError(BlogException):
    """Authenticated user lacks permission for the requested action."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(
            message,
            ErrorCode.FORBIDDEN,
            status_code=403,
        )


class TooManyRequestsError(BlogException):
    """Caller must wait before repeating this action."""

    def __init__(self, message: str = "Too many requests, please try again later", retry_after: Optional[int] = None):
        details = {"retry_after": retry_after} if retry_after is not None else {}
        super().__init__(
            message,
            ErrorCode.TOO_MANY_REQUESTS,
            status_code=429,
            details=details
        )


class DatabaseError(BlogException):
    """Database operation failed."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            message,
            ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=details
        )
