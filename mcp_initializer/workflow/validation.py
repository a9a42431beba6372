"""Schema-validating argument models for the workflow operations.

Each operation gets one Pydantic model.  ``validate_args`` runs the model
against the raw JSON arguments and folds every per-field failure into a single
:class:`~mcp_initializer.errors.ValidationError`, so an operation either gets
a fully valid argument object or no state change at all.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, ClassVar, Optional, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from mcp_initializer.errors import ValidationError
from mcp_initializer.workflow.models import Technology

CONFIRMATION_WORDS: tuple[str, ...] = ("YES", "PROCEED", "CONTINUE")


class OperationArgs(BaseModel):
    """Base class for operation argument models.

    ``required_message`` is used when the whole argument payload is absent;
    ``field_messages`` replaces Pydantic's generic text for missing or
    wrongly-typed fields.  Messages raised from validators are kept as-is.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    required_message: ClassVar[Optional[str]] = None
    field_messages: ClassVar[dict[str, str]] = {}


class NameArgs(OperationArgs):
    required_message: ClassVar[Optional[str]] = "Project name is required"
    field_messages: ClassVar[dict[str, str]] = {
        "name": "Project name must be a non-empty string",
    }

    name: StrictStr

    @field_validator("name")
    @classmethod
    def strip_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Project name must be a non-empty string")
        return value


class DirectoryArgs(OperationArgs):
    required_message: ClassVar[Optional[str]] = "Project directory is required"
    field_messages: ClassVar[dict[str, str]] = {
        "directory": "Project directory must be a non-empty string",
    }

    directory: StrictStr

    @field_validator("directory")
    @classmethod
    def require_absolute(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Project directory must be a non-empty string")
        if not PurePosixPath(value).is_absolute():
            raise ValueError(
                f'❌ ABSOLUTE PATH REQUIRED: "{value}" is not an absolute path. '
                'Please provide a path starting with "/" '
                '(e.g., "/Users/yourname/Projects", "/home/user/workspace")'
            )
        return value


class TechnologyArgs(OperationArgs):
    required_message: ClassVar[Optional[str]] = "Technology choice is required"
    field_messages: ClassVar[dict[str, str]] = {
        "technology": "Technology must be either 'typescript' or 'python'",
    }

    technology: Technology

    @field_validator("technology", mode="before")
    @classmethod
    def require_known(cls, value: Any) -> Any:
        if not isinstance(value, str) or value not in {t.value for t in Technology}:
            raise ValueError("Technology must be either 'typescript' or 'python'")
        return value


class DescriptionArgs(OperationArgs):
    required_message: ClassVar[Optional[str]] = "Project description is required"
    field_messages: ClassVar[dict[str, str]] = {
        "description": "Project description must be a non-empty string",
    }

    description: StrictStr

    @field_validator("description")
    @classmethod
    def strip_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Project description must be a non-empty string")
        return value


class DocumentationArgs(OperationArgs):
    """Both fields are optional; malformed values are dropped, never rejected."""

    documentation_urls: Optional[list[str]] = Field(default=None, alias="documentationUrls")
    custom_context: Optional[str] = Field(default=None, alias="customContext")

    @field_validator("documentation_urls", mode="before")
    @classmethod
    def keep_strings(cls, value: Any) -> Optional[list[str]]:
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, str)]

    @field_validator("custom_context", mode="before")
    @classmethod
    def drop_blank(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None


class ConfirmationArgs(OperationArgs):
    required_message: ClassVar[Optional[str]] = (
        "Confirmation is required. Please provide confirmation='YES', 'PROCEED', or 'CONTINUE'"
    )
    field_messages: ClassVar[dict[str, str]] = {
        "confirmation": "Confirmation must be a string. Use 'YES', 'PROCEED', or 'CONTINUE'",
    }

    confirmation: StrictStr

    @field_validator("confirmation")
    @classmethod
    def normalize_keyword(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in CONFIRMATION_WORDS:
            raise ValueError(
                f'Invalid confirmation: "{value}". '
                'You must explicitly type "YES", "PROCEED", or "CONTINUE"'
            )
        return normalized


ArgsT = TypeVar("ArgsT", bound=OperationArgs)


def validate_args(model: type[ArgsT], args: Any) -> ArgsT:
    """Validate raw tool arguments against *model*.

    Raises:
        ValidationError: with one message per failing field, joined by ``"; "``.
    """
    if not isinstance(args, dict):
        if model.required_message is not None:
            raise ValidationError(model.required_message)
        args = {}

    try:
        return model.model_validate(args)
    except pydantic.ValidationError as exc:
        fields: dict[str, str] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "arguments"
            if error["type"] == "value_error":
                message = str(error["ctx"]["error"])
            else:
                message = model.field_messages.get(field, error["msg"])
            fields.setdefault(field, message)
        raise ValidationError("; ".join(fields.values()), fields=fields) from exc
