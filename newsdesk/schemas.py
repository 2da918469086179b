"""
Pydantic models for API request/response validation.

Request and response payloads use PascalCase keys on the wire (Title,
CreatedAt, TotalViews, ...); snake_case names are accepted on input too.
"""

import re

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_pascal

from .database import DBArticle, DBDashboardEntry, DBUser

NAME_PATTERN = re.compile(r"^[A-Za-z\s]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

ROLES = ("author", "reader")
ARTICLE_STATUSES = ("Draft", "Published")

TITLE_MAX_LENGTH = 150
CONTENT_MIN_LENGTH = 50
PASSWORD_MIN_LENGTH = 8


class PascalModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


# ─────────────────────────────────────────────────────────────
# Validation rules shared by create and update
# ─────────────────────────────────────────────────────────────

def _check_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Email must be a valid email address")
    return value


def _check_title(value: str) -> str:
    if len(value) < 1:
        raise ValueError("Title must be at least 1 character")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must not exceed {TITLE_MAX_LENGTH} characters")
    return value


def _check_content(value: str) -> str:
    if len(value) < CONTENT_MIN_LENGTH:
        raise ValueError(f"Content must be at least {CONTENT_MIN_LENGTH} characters")
    return value


def _check_category(value: str) -> str:
    if not value.strip():
        raise ValueError("Category is required")
    return value


def _check_status(value: str) -> str:
    if value not in ARTICLE_STATUSES:
        raise ValueError("Status must be either 'Draft' or 'Published'")
    return value


# ─────────────────────────────────────────────────────────────
# Auth Schemas
# ─────────────────────────────────────────────────────────────

class SignupRequest(PascalModel):
    """New account details."""
    name: str
    email: str
    password: str
    role: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        if not NAME_PATTERN.match(value):
            raise ValueError("Name must contain only alphabets and spaces")
        return value.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", value):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", value):
            raise ValueError("Password must contain at least one number")
        if not re.search(r"[^A-Za-z0-9]", value):
            raise ValueError("Password must contain at least one special character")
        return value

    @field_validator("role")
    @classmethod
    def validate_role(cls, value: str) -> str:
        if value not in ROLES:
            raise ValueError("Role must be either 'author' or 'reader'")
        return value


class LoginRequest(PascalModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class UserResponse(PascalModel):
    """Public view of a user. Never includes the credential."""
    id: str
    name: str
    email: str
    role: str
    created_at: str

    @classmethod
    def from_db(cls, user: DBUser) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at.isoformat(),
        )


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class ArticleCreateRequest(PascalModel):
    title: str
    content: str
    category: str
    status: str = "Draft"

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _check_title(value)

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str) -> str:
        return _check_content(value)

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str) -> str:
        return _check_category(value)

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str) -> str:
        return _check_status(value)


class ArticleUpdateRequest(PascalModel):
    """Partial update; omitted fields keep their value."""
    title: str | None = None
    content: str | None = None
    category: str | None = None
    status: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return None if value is None else _check_title(value)

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str | None) -> str | None:
        return None if value is None else _check_content(value)

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str | None) -> str | None:
        return None if value is None else _check_category(value)

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str | None) -> str | None:
        return None if value is None else _check_status(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class AuthorInfo(PascalModel):
    id: str
    name: str | None = None


class ArticleResponse(PascalModel):
    id: str
    title: str
    content: str
    category: str
    status: str
    author_id: str
    author: AuthorInfo
    created_at: str
    updated_at: str
    deleted_at: str | None = None

    @classmethod
    def from_db(cls, article: DBArticle) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            category=article.category,
            status=article.status,
            author_id=article.author_id,
            author=AuthorInfo(id=article.author_id, name=article.author_name),
            created_at=article.created_at.isoformat(),
            updated_at=article.updated_at.isoformat(),
            deleted_at=article.deleted_at.isoformat() if article.deleted_at else None,
        )


# ─────────────────────────────────────────────────────────────
# Dashboard Schemas
# ─────────────────────────────────────────────────────────────

class DashboardEntryResponse(PascalModel):
    """One article with its aggregated view total."""
    id: str
    title: str
    category: str
    status: str
    created_at: str
    total_views: int

    @classmethod
    def from_db(cls, entry: DBDashboardEntry) -> "DashboardEntryResponse":
        return cls(
            id=entry.id,
            title=entry.title,
            category=entry.category,
            status=entry.status,
            created_at=entry.created_at.isoformat(),
            total_views=entry.total_views,
        )
