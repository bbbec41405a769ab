"""Error hierarchy for midivault.

Error layers:
- VaultError: Base class for all midivault errors
- DomainError: Business rule violations, validation failures (reported to the caller,
  no state mutated)
- InfrastructureError: Storage or configuration failures (state is whatever completed
  before the failing step)

The CLI maps these to messages and exit codes in midivault.cli.main.
"""


class VaultError(Exception):
    """Base class for all midivault errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations)
# =============================================================================


class DomainError(VaultError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class ConflictError(DomainError):
    """Resource already exists."""


class AuthorizationError(DomainError):
    """Acting identity is missing or not allowed to perform this operation."""


class SelfLikeError(AuthorizationError):
    """An owner tried to like their own record."""

    def __init__(self, message: str = "Cannot like your own record") -> None:
        super().__init__(message, code="self_like")


# =============================================================================
# Infrastructure Errors (system-level failures)
# =============================================================================


class InfrastructureError(VaultError):
    """Base class for infrastructure/system errors."""


class StorageError(InfrastructureError):
    """Blob store or slot store failed to read or commit."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
