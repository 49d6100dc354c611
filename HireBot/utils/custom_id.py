# -*- coding: utf-8 -*-
"""Custom ids carried by application buttons and modals.

Each variant knows its own encoding (``str(variant)``); ``parse_custom_id`` is the
inverse and returns ``None`` for anything that does not belong to the workflow::

    apply_<typeId>
    applicationModal_apply_<typeId>
    acceptApplication_<recordId>
    rejectApplication_<recordId>
    rejectModal_<recordId>
"""

from dataclasses import dataclass
from typing import Union

APPLY = "apply"
APPLICATION_MODAL = "applicationModal"
ACCEPT_APPLICATION = "acceptApplication"
REJECT_APPLICATION = "rejectApplication"
REJECT_MODAL = "rejectModal"

SEPARATOR = "_"


@dataclass(frozen=True)
class Apply:
    type_id: str

    def __str__(self) -> str:
        return f"{APPLY}{SEPARATOR}{self.type_id}"


@dataclass(frozen=True)
class ApplicationModal:
    type_id: str

    def __str__(self) -> str:
        return f"{APPLICATION_MODAL}{SEPARATOR}{Apply(self.type_id)}"


@dataclass(frozen=True)
class AcceptApplication:
    record_id: int

    def __str__(self) -> str:
        return f"{ACCEPT_APPLICATION}{SEPARATOR}{self.record_id}"


@dataclass(frozen=True)
class RejectApplication:
    record_id: int

    def __str__(self) -> str:
        return f"{REJECT_APPLICATION}{SEPARATOR}{self.record_id}"


@dataclass(frozen=True)
class RejectModal:
    record_id: int

    def __str__(self) -> str:
        return f"{REJECT_MODAL}{SEPARATOR}{self.record_id}"


CustomId = Union[Apply, ApplicationModal, AcceptApplication, RejectApplication, RejectModal]

_RECORD_VARIANTS = {
    ACCEPT_APPLICATION: AcceptApplication,
    REJECT_APPLICATION: RejectApplication,
    REJECT_MODAL: RejectModal,
}


def parse_custom_id(custom_id: str | None) -> CustomId | None:
    """Decode a custom id into its variant, or ``None`` if it is not ours or malformed."""
    if not custom_id or SEPARATOR not in custom_id:
        return None

    tag, rest = custom_id.split(SEPARATOR, 1)
    if not rest:
        return None

    if tag == APPLY:
        return Apply(rest)

    if tag == APPLICATION_MODAL:
        inner = parse_custom_id(rest)
        return ApplicationModal(inner.type_id) if isinstance(inner, Apply) else None

    variant = _RECORD_VARIANTS.get(tag)
    if variant is not None and rest.isascii() and rest.isdigit():
        return variant(int(rest))

    return None
