# -*- coding: utf-8 -*-
"""Application types and their form fields, loaded once from the ``application.types`` config list."""

import enum
from dataclasses import dataclass, field

from utils.errors import ConfigInconsistency
from utils.helpers import parse_id

# Discord modals hold at most five text inputs, messages at most five button rows.
MAX_FIELDS_PER_TYPE = 5
MAX_TYPES = 25

BUTTON_COLORS = ("primary", "secondary", "success", "danger", "blurple", "grey", "gray", "green", "red")


class FieldStyle(str, enum.Enum):
    """Input shape of a form field."""

    SHORT = "short"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class FormField:
    id: str
    label: str
    style: FieldStyle = FieldStyle.SHORT
    placeholder: str = ""
    required: bool = True


@dataclass(frozen=True)
class ApplicationType:
    id: str
    label: str
    role_id: int
    color: str = "primary"
    fields: tuple[FormField, ...] = field(default_factory=tuple)

    def get_field(self, field_id: str) -> FormField | None:
        return next((f for f in self.fields if f.id == field_id), None)


def _require(entry: dict, key: str, where: str):
    value = entry.get(key)
    if value is None or value == "":
        raise ConfigInconsistency(f"{where}: missing '{key}'")
    return value


def _parse_field(entry: dict, type_id: str) -> FormField:
    where = f"application type '{type_id}'"
    field_id = str(_require(entry, "id", where))
    style = str(entry.get("style", FieldStyle.SHORT.value)).lower()
    try:
        field_style = FieldStyle(style)
    except ValueError:
        raise ConfigInconsistency(f"{where}: field '{field_id}' has unknown style '{style}'") from None

    return FormField(
        id=field_id,
        label=str(_require(entry, "label", where)),
        style=field_style,
        placeholder=str(entry.get("placeholder") or ""),
        required=bool(entry.get("required", True)),
    )


def _parse_type(entry: dict) -> ApplicationType:
    type_id = str(_require(entry, "id", "application type"))
    where = f"application type '{type_id}'"

    color = str(entry.get("color", "primary")).lower()
    if color not in BUTTON_COLORS:
        raise ConfigInconsistency(f"{where}: unknown button color '{color}'")

    try:
        role_id = parse_id(_require(entry, "role", where))
    except (TypeError, ValueError):
        raise ConfigInconsistency(f"{where}: role must be a numeric id") from None

    fields = tuple(_parse_field(f, type_id) for f in entry.get("fields") or ())
    if not fields:
        raise ConfigInconsistency(f"{where}: at least one field is required")
    if len(fields) > MAX_FIELDS_PER_TYPE:
        raise ConfigInconsistency(f"{where}: at most {MAX_FIELDS_PER_TYPE} fields are supported")
    if len({f.id for f in fields}) != len(fields):
        raise ConfigInconsistency(f"{where}: duplicate field ids")

    return ApplicationType(
        id=type_id,
        label=str(_require(entry, "label", where)),
        role_id=role_id,
        color=color,
        fields=fields,
    )


class ApplicationRegistry:
    """Read-only, ordered collection of application types.

    Label lookup is an exact match against the label embedded in rendered record titles,
    so renaming a label strands records that are still pending under the old name.
    """

    def __init__(self, types=()):
        self._types: tuple[ApplicationType, ...] = tuple(types)
        self._by_id = {t.id: t for t in self._types}
        self._by_label = {t.label: t for t in self._types}

        if len(self._by_id) != len(self._types):
            raise ConfigInconsistency("duplicate application type ids")
        if len(self._by_label) != len(self._types):
            raise ConfigInconsistency("duplicate application type labels")
        if len(self._types) > MAX_TYPES:
            raise ConfigInconsistency(f"at most {MAX_TYPES} application types are supported")

    @classmethod
    def from_config(cls, entries) -> "ApplicationRegistry":
        """Build the registry from the ``application.types`` list of the bot config."""
        return cls(_parse_type(entry) for entry in entries or ())

    def lookup_by_id(self, type_id: str) -> ApplicationType | None:
        return self._by_id.get(type_id)

    def lookup_by_label(self, label: str) -> ApplicationType | None:
        return self._by_label.get(label)

    def all(self) -> tuple[ApplicationType, ...]:
        return self._types

    def __iter__(self):
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)
