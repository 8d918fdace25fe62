"""
Schemas and validation rules for the contact form.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 1000

TOO_SHORT = "too short"
TOO_LONG = "too long"
INVALID_FORMAT = "invalid format"


class ContactField(str, Enum):
    """Inputs of the contact form, in display order."""

    NAME = "name"
    EMAIL = "email"
    MESSAGE = "message"


class SubmissionStatus(str, Enum):
    """Where the form is in its submit lifecycle."""

    IDLE = "idle"
    SENDING = "sending"
    SUCCESS = "success"
    ERROR = "error"


FieldErrors = Dict[str, str]

# (violates, message): the rule fails when violates(trimmed_value) is True
Rule = Tuple[Callable[[str], bool], str]


def is_valid_email(value: str) -> bool:
    """Single @, non-empty local part, dotted domain. No DNS lookups.

    Length is left to FIELD_RULES: the library's own length caps are
    stricter than EMAIL_MAX_LENGTH, so its "too long" verdicts are ignored.
    Addresses under the .test special-use domain are accepted.
    """
    if value.count("@") != 1:
        return False
    local, _, domain = value.partition("@")
    if not local or "." not in domain.strip("."):
        return False
    try:
        validate_email(
            value,
            check_deliverability=False,
            test_environment=True,
            globally_deliverable=False,
        )
    except EmailNotValidError as e:
        return (
            str(e).startswith("The email address is too long")
            and len(value) <= EMAIL_MAX_LENGTH
        )
    return True


FIELD_RULES: Dict[ContactField, List[Rule]] = {
    ContactField.NAME: [
        (lambda v: len(v) < NAME_MIN_LENGTH, TOO_SHORT),
        (lambda v: len(v) > NAME_MAX_LENGTH, TOO_LONG),
    ],
    ContactField.EMAIL: [
        (lambda v: len(v) > EMAIL_MAX_LENGTH, TOO_LONG),
        (lambda v: not is_valid_email(v), INVALID_FORMAT),
    ],
    ContactField.MESSAGE: [
        (lambda v: len(v) < MESSAGE_MIN_LENGTH, TOO_SHORT),
        (lambda v: len(v) > MESSAGE_MAX_LENGTH, TOO_LONG),
    ],
}


def first_violation(field: ContactField, value: str) -> Optional[str]:
    """Return the message of the first rule the trimmed value breaks."""
    for violates, message in FIELD_RULES[field]:
        if violates(value):
            return message
    return None


class ContactDraft(BaseModel):
    """Raw form values as typed, edited one field at a time."""

    name: str = ""
    email: str = ""
    message: str = ""


class ContactRecord(BaseModel):
    """A validated contact submission with every value trimmed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Sender's name")
    email: str = Field(..., description="Sender's email address")
    message: str = Field(..., description="Message content")

    @field_validator("name", "email", "message")
    @classmethod
    def apply_field_rules(cls, v: str, info: ValidationInfo) -> str:
        value = v.strip()
        message = first_violation(ContactField(info.field_name), value)
        if message is not None:
            raise PydanticCustomError("contact_field", message)
        return value


class ValidationOutcome(BaseModel):
    """Either a validated record or the errors of every failing field."""

    record: Optional[ContactRecord] = None
    errors: FieldErrors = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.record is not None and not self.errors


def field_error_messages(exc: ValidationError) -> FieldErrors:
    """Map a ContactRecord ValidationError to field -> first message."""
    errors: FieldErrors = {}
    for error in exc.errors():
        if not error["loc"]:
            continue
        errors.setdefault(str(error["loc"][0]), error["msg"])
    return errors


def validate_contact(
    data: Union[ContactDraft, Mapping[str, Any]],
) -> ValidationOutcome:
    """
    Check every contact field independently.

    Args:
        data: The draft, or any mapping with name/email/message keys.
              Missing keys are treated as empty strings.

    Returns:
        ValidationOutcome holding the trimmed record, or one error per
        failing field. Never raises for invalid input.
    """
    if isinstance(data, ContactDraft):
        raw = data.model_dump()
    else:
        raw = {field.value: data.get(field.value, "") for field in ContactField}

    try:
        record = ContactRecord(**raw)
    except ValidationError as exc:
        return ValidationOutcome(errors=field_error_messages(exc))
    return ValidationOutcome(record=record)
