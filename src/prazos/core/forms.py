"""Deadline form validation -- raw form fields -> DeadlineCreate

Errors come back per field so the form can show them inline; nothing here
is fatal.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .models.deadline import Deadline, DeadlineCreate

# Optional free-text fields: blank input means "not set"
_OPTIONAL_TEXT_FIELDS = ("process_number", "type", "parties", "responsible_user_id")

REQUIRED_MESSAGE = "Campo obrigatório"
INVALID_DATE_MESSAGE = "Data inválida"
INVALID_CHOICE_MESSAGE = "Valor inválido"


class FormValidationError(ValueError):
    """Form input rejected; ``errors`` maps field name -> message"""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


def _message_for(error: dict[str, Any]) -> str:
    kind = error.get("type", "")
    if kind in ("missing", "string_too_short"):
        return REQUIRED_MESSAGE
    if kind.startswith("datetime") or kind.startswith("date"):
        return INVALID_DATE_MESSAGE
    if kind == "enum":
        return INVALID_CHOICE_MESSAGE
    return error.get("msg", INVALID_CHOICE_MESSAGE)


def validate_deadline_form(fields: Mapping[str, Any]) -> DeadlineCreate:
    """Validate raw form input

    Args:
        fields: field name -> raw value (strings as typed in the form)

    Returns:
        DeadlineCreate ready to be sent

    Raises:
        FormValidationError: one or more fields are invalid
    """
    data: dict[str, Any] = {k: v for k, v in fields.items() if v is not None}

    description = data.get("task_description")
    if isinstance(description, str):
        data["task_description"] = description.strip()
    for name in _OPTIONAL_TEXT_FIELDS:
        value = data.get(name)
        if isinstance(value, str) and not value.strip():
            data.pop(name)
    if data.get("due_date") == "":
        data.pop("due_date")

    try:
        return DeadlineCreate.model_validate(data)
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err.get("loc") else "__root__"
            errors.setdefault(field, _message_for(err))
        raise FormValidationError(errors) from e


def form_fields_from_deadline(deadline: Deadline) -> dict[str, str]:
    """Prefill an edit form from an existing deadline"""
    return {
        "task_description": deadline.task_description,
        "due_date": deadline.due_date.strftime("%Y-%m-%dT%H:%M"),
        "process_number": deadline.process_number or "",
        "type": deadline.type or "",
        "parties": deadline.parties or "",
        "status": deadline.status.value,
        "classification": deadline.classification.value,
        "responsible_user_id": deadline.responsible_user_id or "",
    }
