# -*- coding: utf-8 -*-
"""Buttons, embeds and modals for the application workflow.

Nothing here keeps state between interactions: every button and modal carries its
meaning in its custom id (see ``utils.custom_id``), and the views are built with
``timeout=None`` so controls on old messages keep resolving after a restart.
"""

import discord

from models.application import ApplicationRegistry, ApplicationType, FieldStyle
from utils.custom_id import AcceptApplication, ApplicationModal, Apply, RejectApplication, RejectModal
from utils.strings import get_string

BUTTONS_PER_ROW = 5

# Discord component limits
MODAL_TITLE_LIMIT = 45
INPUT_LABEL_LIMIT = 45
PLACEHOLDER_LIMIT = 100
# Five answers have to fit into one embed description (4096).
ANSWER_MAX_LENGTH = 750
# Embed field values hold at most 1024 characters.
REASON_MAX_LENGTH = 1024

_TEXT_STYLES = {
    FieldStyle.SHORT: discord.TextStyle.short,
    FieldStyle.PARAGRAPH: discord.TextStyle.paragraph,
}


def chunk_rows(items, size: int = BUTTONS_PER_ROW) -> list[list]:
    """Group items into rows of at most ``size``, keeping their order."""
    items = list(items)
    return [items[i : i + size] for i in range(0, len(items), size)]


def build_apply_embed(lang: str = "en") -> discord.Embed:
    return discord.Embed(
        title=get_string(lang, "application.intake.panel_title"),
        description=get_string(lang, "application.intake.panel_description"),
        colour=discord.Colour(0x00FF00),
    )


def build_apply_view(registry: ApplicationRegistry) -> discord.ui.View:
    """One button per application type, five per row, in registry order."""
    view = discord.ui.View(timeout=None)
    for row, types in enumerate(chunk_rows(registry.all())):
        for app_type in types:
            view.add_item(
                discord.ui.Button(
                    label=app_type.label[:80],
                    style=getattr(discord.ButtonStyle, app_type.color),
                    custom_id=str(Apply(app_type.id)),
                    row=row,
                )
            )
    return view


def build_application_modal(app_type: ApplicationType, lang: str = "en") -> discord.ui.Modal:
    """The form for one application type; inputs are keyed by field id."""
    modal = discord.ui.Modal(
        title=get_string(lang, "application.intake.modal_title", label=app_type.label)[:MODAL_TITLE_LIMIT],
        custom_id=str(ApplicationModal(app_type.id)),
    )
    for form_field in app_type.fields:
        modal.add_item(
            discord.ui.TextInput(
                label=form_field.label[:INPUT_LABEL_LIMIT],
                style=_TEXT_STYLES[form_field.style],
                custom_id=form_field.id,
                placeholder=form_field.placeholder[:PLACEHOLDER_LIMIT] or None,
                required=form_field.required,
                max_length=ANSWER_MAX_LENGTH,
            )
        )
    return modal


def build_decision_view(record_id: int, lang: str = "en") -> discord.ui.View:
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label=get_string(lang, "application.review.accept_button"),
            style=discord.ButtonStyle.success,
            custom_id=str(AcceptApplication(record_id)),
        )
    )
    view.add_item(
        discord.ui.Button(
            label=get_string(lang, "application.review.reject_button"),
            style=discord.ButtonStyle.danger,
            custom_id=str(RejectApplication(record_id)),
        )
    )
    return view


def build_reject_modal(record_id: int, lang: str = "en") -> discord.ui.Modal:
    modal = discord.ui.Modal(
        title=get_string(lang, "application.review.reject_modal_title"),
        custom_id=str(RejectModal(record_id)),
    )
    modal.add_item(
        discord.ui.TextInput(
            label=get_string(lang, "application.review.reason_label"),
            style=discord.TextStyle.paragraph,
            custom_id="reason",
            placeholder=get_string(lang, "application.review.reason_placeholder"),
            required=True,
            max_length=REASON_MAX_LENGTH,
        )
    )
    return modal


def modal_values(data: dict | None) -> dict[str, str]:
    """Collect ``custom_id -> value`` from a raw modal submit payload.

    Inputs arrive wrapped in action rows (``components``) or, for label
    components, under a single ``component`` key.
    """
    values = {}
    for row in (data or {}).get("components", []):
        children = row.get("components") or ([row["component"]] if "component" in row else [])
        for child in children:
            if "custom_id" in child:
                values[child["custom_id"]] = child.get("value") or ""
    return values
