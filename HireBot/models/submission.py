# -*- coding: utf-8 -*-
"""Submission records and their embed codec.

A submission has no storage besides the embed posted to the applications channel.
``SubmissionRecord.to_embed``, ``apply_to`` and ``from_embed`` are the only places
that know the rendered layout; everything else works on the dataclass.

Layout::

    title        Application for <type label>
    description  **<field label>:** <value>      (one line per field, form order)
    field        Status: Pending | Accepted | Rejected
    field        Reason for Rejection: <reason>  (rejected only)
    footer       Submitted by <applicant tag> (<applicant id>)
"""

import enum
import re
from dataclasses import dataclass, field

import discord

from models.application import ApplicationType
from utils.errors import HireValidationError, RecordUnparsable

TITLE_PREFIX = "Application for"
FOOTER_PREFIX = "Submitted by "
STATUS_FIELD = "Status"
REASON_FIELD = "Reason for Rejection"

FOOTER_ID = re.compile(r"\((\d+)\)$")


class SubmissionStatus(str, enum.Enum):
    """Valid status values for a submission record."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not SubmissionStatus.PENDING


STATUS_COLOURS = {
    SubmissionStatus.PENDING: discord.Colour(0x00FF00),
    SubmissionStatus.ACCEPTED: discord.Colour.green(),
    SubmissionStatus.REJECTED: discord.Colour(0xFF0000),
}


class AlreadyDecided(HireValidationError):
    """A decision was attempted on a record that is already accepted or rejected."""

    pass


def parse_applicant_id(footer_text: str | None) -> int:
    """Return the applicant id encoded as the trailing ``(<digits>)`` of a record footer."""
    if not footer_text:
        raise RecordUnparsable("Footer text not found")
    match = FOOTER_ID.search(footer_text)
    if match is None:
        raise RecordUnparsable("User ID not found in embed footer")
    return int(match.group(1))


def parse_type_label(title: str | None) -> str:
    """Return the application type label from a record title (third token onwards)."""
    parts = (title or "").split(" ", 2)
    if len(parts) < 3 or " ".join(parts[:2]) != TITLE_PREFIX or not parts[2]:
        raise RecordUnparsable("Application type not found in embed title")
    return parts[2]


def _parse_values(description: str | None, app_type: ApplicationType) -> dict[str, str]:
    """Split the description back into field values.

    Fields are matched in form order, so a multi-line answer only ends where the
    next field's label line starts.
    """
    values = {f.id: "" for f in app_type.fields}
    lines = (description or "").split("\n")
    pending = list(app_type.fields)
    current = None

    for line in lines:
        if pending:
            prefix = f"**{pending[0].label}:**"
            if line.startswith(prefix):
                current = pending.pop(0)
                values[current.id] = line[len(prefix) :].removeprefix(" ")
                continue
        if current is not None:
            values[current.id] += f"\n{line}"

    return values


@dataclass
class SubmissionRecord:
    applicant_id: int
    applicant_tag: str
    type_label: str
    field_values: dict[str, str] = field(default_factory=dict)
    status: SubmissionStatus = SubmissionStatus.PENDING
    rejection_reason: str | None = None
    record_id: int | None = None

    @property
    def is_decided(self) -> bool:
        return self.status.is_terminal

    @property
    def footer_text(self) -> str:
        return f"{FOOTER_PREFIX}{self.applicant_tag} ({self.applicant_id})"

    def accept(self) -> None:
        if self.is_decided:
            raise AlreadyDecided(f"record {self.record_id} is already {self.status.value}")
        self.status = SubmissionStatus.ACCEPTED

    def reject(self, reason: str) -> None:
        if self.is_decided:
            raise AlreadyDecided(f"record {self.record_id} is already {self.status.value}")
        self.status = SubmissionStatus.REJECTED
        self.rejection_reason = reason

    def to_embed(self, app_type: ApplicationType) -> discord.Embed:
        """Render a new record. ``app_type`` supplies the field labels and order."""
        description = "\n".join(f"**{f.label}:** {self.field_values.get(f.id, '')}" for f in app_type.fields)
        embed = discord.Embed(
            title=f"{TITLE_PREFIX} {self.type_label}",
            description=description,
            colour=STATUS_COLOURS[self.status],
        )
        embed.add_field(name=STATUS_FIELD, value=self.status.value.capitalize(), inline=True)
        if self.status == SubmissionStatus.REJECTED:
            embed.add_field(name=REASON_FIELD, value=self.rejection_reason or "-", inline=False)
        embed.set_footer(text=self.footer_text)
        return embed

    def apply_to(self, embed: discord.Embed) -> discord.Embed:
        """Return a copy of a posted record carrying this record's status.

        Only the colour, the status field and the rejection reason change. Title,
        description and footer are kept as posted, since the answers exist nowhere else.
        """
        updated = discord.Embed.from_dict(embed.to_dict())
        updated.colour = STATUS_COLOURS[self.status]

        status_value = self.status.value.capitalize()
        index = next((i for i, f in enumerate(updated.fields) if f.name == STATUS_FIELD), None)
        if index is None:
            updated.insert_field_at(0, name=STATUS_FIELD, value=status_value, inline=True)
        else:
            updated.set_field_at(index, name=STATUS_FIELD, value=status_value, inline=True)

        if self.status == SubmissionStatus.REJECTED:
            updated.add_field(name=REASON_FIELD, value=self.rejection_reason or "-", inline=False)
        return updated

    @classmethod
    def from_embed(
        cls, embed: discord.Embed, record_id: int | None = None, app_type: ApplicationType | None = None
    ) -> "SubmissionRecord":
        """Rebuild a record from a posted embed.

        The applicant id is never defaulted: a footer without the trailing id raises.
        The title is read as-is; resolving the label to a configured type is up to the
        caller. Field values are only recovered when ``app_type`` is given.
        """
        footer_text = embed.footer.text if embed.footer else None
        applicant_id = parse_applicant_id(footer_text)
        applicant_tag = FOOTER_ID.sub("", footer_text).rstrip().removeprefix(FOOTER_PREFIX)

        title = embed.title or ""
        type_label = title.removeprefix(TITLE_PREFIX).strip() if title.startswith(f"{TITLE_PREFIX} ") else title

        status = None
        reason = None
        for embed_field in embed.fields:
            if embed_field.name == STATUS_FIELD:
                try:
                    status = SubmissionStatus(str(embed_field.value).lower())
                except ValueError:
                    raise RecordUnparsable(f"Unknown status '{embed_field.value}'") from None
            elif embed_field.name == REASON_FIELD:
                reason = embed_field.value

        if status is None:
            status = SubmissionStatus.REJECTED if reason is not None else SubmissionStatus.PENDING

        return cls(
            applicant_id=applicant_id,
            applicant_tag=applicant_tag,
            type_label=type_label,
            field_values=_parse_values(embed.description, app_type) if app_type is not None else {},
            status=status,
            rejection_reason=reason if status == SubmissionStatus.REJECTED else None,
            record_id=record_id,
        )
