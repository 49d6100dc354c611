# -*- coding: utf-8 -*-
"""Intake: post the apply panel, show the form for the chosen type, render the submission."""

from discord import Interaction

from models.submission import SubmissionRecord
from modules.views.application import (
    build_application_modal,
    build_apply_embed,
    build_apply_view,
    build_decision_view,
    modal_values,
)
from modules.workflow.context import ApplicationContext
from utils.custom_id import ApplicationModal, Apply
from utils.errors import ConfigInconsistency


def _resolve_type(ctx: ApplicationContext, type_id: str):
    app_type = ctx.registry.lookup_by_id(type_id)
    if app_type is None:
        raise ConfigInconsistency(ctx.text("application.intake.unknown_type"))
    return app_type


async def start(ctx: ApplicationContext, interaction: Interaction) -> None:
    """Post one button per application type into the command channel."""
    if not len(ctx.registry):
        raise ConfigInconsistency(ctx.text("application.intake.no_types"))

    channel = await ctx.command_channel()
    view = build_apply_view(ctx.registry)
    await channel.send(embed=build_apply_embed(ctx.lang), view=view)
    # presses arrive through the interaction listener; keep the view out of the client's view store
    view.stop()
    ctx.log.info(f"application: panel with {len(ctx.registry)} types posted by {interaction.user}")

    await interaction.response.send_message(ctx.text("application.intake.posted"), ephemeral=True)


async def select_type(ctx: ApplicationContext, interaction: Interaction, custom_id: Apply) -> None:
    """Show the form of the application type encoded in the pressed button."""
    app_type = _resolve_type(ctx, custom_id.type_id)
    await interaction.response.send_modal(build_application_modal(app_type, ctx.lang))


async def submit_form(ctx: ApplicationContext, interaction: Interaction, custom_id: ApplicationModal) -> None:
    """Render the submitted form as a pending record and attach the decision buttons.

    The buttons carry the record's own message id, which only exists after the
    first send, so the record is sent first and patched afterwards.
    """
    app_type = _resolve_type(ctx, custom_id.type_id)
    values = modal_values(interaction.data)

    record = SubmissionRecord(
        applicant_id=interaction.user.id,
        applicant_tag=str(interaction.user),
        type_label=app_type.label,
        field_values={f.id: values.get(f.id, "") for f in app_type.fields},
    )

    channel = await ctx.applications_channel()
    message = await channel.send(embed=record.to_embed(app_type))
    record.record_id = message.id
    ctx.log.info(f"application: {app_type.id} submitted by {record.applicant_tag} as record {message.id}")

    await interaction.response.send_message(ctx.text("application.intake.submitted"), ephemeral=True)

    view = build_decision_view(message.id, ctx.lang)
    await message.edit(view=view)
    view.stop()
