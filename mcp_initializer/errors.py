"""Exception hierarchy for the MCP project initializer.

Every user-facing failure derives from :class:`InitializerError`.  The session
facade catches these around each operation and turns them into an error
``ToolResponse``; none of them ever reaches the transport as a fault.
"""

from __future__ import annotations


class InitializerError(Exception):
    """Base class for all initializer errors."""


class ValidationError(InitializerError):
    """Raised when a tool argument is missing or malformed."""

    def __init__(self, message: str, *, fields: dict[str, str] | None = None) -> None:
        self.fields = fields or {}
        super().__init__(message)


class StepOrderViolation(InitializerError):
    """Raised when an operation is invoked before its preceding step is done."""

    def __init__(self, operation: str, current: str, required: tuple[str, ...], hint: str) -> None:
        self.operation = operation
        self.current = current
        self.required = required
        super().__init__(f"⚠️ STEP ORDER VIOLATION: {hint}")


class MissingConfiguration(InitializerError):
    """Raised when generation is requested before the required data exists."""


class TemplateError(InitializerError):
    """Base class for template rendering failures."""


class TemplateNotFound(TemplateError):
    """Raised when a named template asset cannot be read."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template {name} not found or could not be loaded")


class UnresolvedPlaceholder(TemplateError):
    """Raised in strict mode when a template references an unknown variable."""

    def __init__(self, template: str, placeholder: str) -> None:
        self.template = template
        self.placeholder = placeholder
        super().__init__(
            f"Template {template} references unresolved placeholder {{{{{placeholder}}}}}"
        )


class ExternalFetchFailure(InitializerError):
    """A single documentation download failed.

    Never propagated to the caller; it is captured into a ``FetchOutcome``.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")
