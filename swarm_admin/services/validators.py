"""
Form Validators - Declarative schemas for create/edit payloads.

Each form is a pydantic model. `validate_form` runs one synchronously and
turns pydantic's errors into a domain ValidationError carrying field paths
and the dashboard's messages, so nothing malformed reaches the store.
"""

from typing import Any, ClassVar, Dict, List, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from swarm_admin.domain.errors import FieldError, ValidationError
from swarm_admin.domain.role import PERMISSION_CATALOG

F = TypeVar("F", bound="AdminForm")

STATUSES = ("Active", "Inactive", "Pending")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class AdminForm(BaseModel):
    """
    Base for dashboard forms.

    `messages` maps "<field>.<pydantic error type>" to the message shown
    next to that field; `cross_field` receives errors raised by
    model-level (multi-field) rules.
    """

    messages: ClassVar[Dict[str, str]] = {}
    cross_field: ClassVar[str] = "__root__"


class UserForm(AdminForm):
    """Create/edit user form. `id` is present only when editing."""

    messages: ClassVar[Dict[str, str]] = {
        "name.string_too_short": "Name must be at least 2 characters.",
        "email.value_error": "Invalid email address.",
        "role.string_too_short": "Role is required.",
        "role.missing": "Role is required.",
        "status.literal_error": "Status is required.",
        "status.missing": "Status is required.",
        "password.string_too_short": "Password must be at least 8 characters.",
    }
    cross_field: ClassVar[str] = "confirm_password"

    id: Optional[str] = None
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    role: str = Field(min_length=1)
    status: Literal["Active", "Inactive", "Pending"]
    department: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = Field(default=None, max_length=100)
    password: Optional[str] = Field(default=None, min_length=8)
    confirm_password: Optional[str] = None

    @field_validator("id", "department", "location", "password", "confirm_password", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def is_edit(self) -> bool:
        return self.id is not None

    @model_validator(mode="after")
    def check_password(self) -> "UserForm":
        # Creation requires a password; any supplied password must be confirmed
        if not self.is_edit and not self.password:
            raise PydanticCustomError("password_mismatch", "Passwords required or do not match")
        if self.password and self.password != self.confirm_password:
            raise PydanticCustomError("password_mismatch", "Passwords required or do not match")
        return self

    def record_values(self) -> Dict[str, Any]:
        """Fields destined for the store (role still a name, no confirmation)."""
        values = self.model_dump(exclude={"id", "confirm_password", "role"})
        if not values["password"]:
            values.pop("password")
        return values


class RoleForm(AdminForm):
    """Create/edit role form."""

    messages: ClassVar[Dict[str, str]] = {
        "name.string_too_short": "Role name must be at least 2 characters.",
        "permissions.too_short": "At least one permission is required.",
    }

    id: Optional[str] = None
    name: str = Field(min_length=2, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    permissions: List[str] = Field(min_length=1)

    @field_validator("id", "description", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("permissions")
    @classmethod
    def check_catalog(cls, value: List[str], info: ValidationInfo) -> List[str]:
        context = info.context or {}
        if context.get("enforce_permission_catalog", True):
            unknown = [p for p in value if p not in PERMISSION_CATALOG]
            if unknown:
                raise PydanticCustomError(
                    "unknown_permission",
                    "Unknown permission: {names}",
                    {"names": ", ".join(unknown)},
                )
        return value


class ProfileForm(AdminForm):
    """Current-user profile form. Email is shown but not editable here."""

    messages: ClassVar[Dict[str, str]] = {
        "name.string_too_short": "Name must be at least 2 characters.",
        "email.value_error": "Invalid email address.",
    }

    name: str = Field(min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def profile_values(self) -> Dict[str, Any]:
        """Editable fields; a blank department/location clears it."""
        return {
            "name": self.name,
            "department": self.department or None,
            "location": self.location or None,
        }


class PasswordChangeForm(AdminForm):
    """Change-password form for the current user."""

    messages: ClassVar[Dict[str, str]] = {
        "current_password.string_too_short": "Current password is required.",
        "current_password.missing": "Current password is required.",
        "new_password.string_too_short": "New password must be at least 8 characters.",
    }
    cross_field: ClassVar[str] = "confirm_password"

    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)
    confirm_password: str

    @model_validator(mode="after")
    def check_confirmation(self) -> "PasswordChangeForm":
        if self.new_password != self.confirm_password:
            raise PydanticCustomError("password_mismatch", "New passwords don't match")
        return self


def _field_errors(form_cls: Type[AdminForm], exc: PydanticValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"]]
        field = ".".join(loc) if loc else form_cls.cross_field
        message = form_cls.messages.get(f"{field}.{error['type']}", error["msg"])
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_form(
    form_cls: Type[F],
    values: Mapping[str, Any],
    context: Optional[Dict[str, Any]] = None,
) -> F:
    """
    Validate raw form values.

    Args:
        form_cls: Form model to validate against
        values: Raw field values from the UI
        context: Optional validation context (e.g. enforce_permission_catalog)

    Returns:
        The validated form

    Raises:
        ValidationError: one FieldError per failing field
    """
    try:
        return form_cls.model_validate(dict(values), context=context)
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(form_cls, exc)) from exc
