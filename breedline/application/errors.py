from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(AppError):
    code = "auth_error"
    status_code = 401


class PermissionDenied(AppError):
    code = "forbidden"
    status_code = 403


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class InvalidSex(ValidationError):
    """Sire is not male or a dam is not female."""

    code = "invalid_sex"
    status_code = 400


class ImmutableFieldChange(ValidationError):
    """Update tried to rebind a lineage or ownership reference."""

    code = "immutable_field"
    status_code = 400


class FeatureDisabled(AppError):
    code = "feature_disabled"
    status_code = 400


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class AlreadyPregnant(ConflictError):
    code = "already_pregnant"


class InvalidTransition(ConflictError):
    code = "invalid_transition"


class AlreadyTerminal(ConflictError):
    code = "already_terminal"


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500
