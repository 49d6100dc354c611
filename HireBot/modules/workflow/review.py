# -*- coding: utf-8 -*-
"""Review: accept or reject a posted submission record.

Everything needed for a decision is parsed back out of the record embed. A decision
only touches the record's colour, status and rejection reason; the applicant's answers
stay exactly as posted. Side effects are not transactional: a role granted before a
later step fails stays granted, and nothing is retried.
"""

import discord
from discord import Interaction

from models.application import ApplicationType
from models.submission import SubmissionRecord, parse_type_label
from modules.views.application import build_reject_modal, modal_values
from modules.workflow.context import ApplicationContext
from utils.custom_id import AcceptApplication, RejectApplication, RejectModal
from utils.errors import (
    CollaboratorFailure,
    ConfigInconsistency,
    HireException,
    HirePermissionError,
    HireValidationError,
    RecordUnparsable,
)


def can_review(ctx: ApplicationContext, interaction: Interaction) -> bool:
    """Return True if no reviewer role is configured, or the user is an administrator or holds it."""
    if ctx.reviewer_role_id is None:
        return True
    user = interaction.user
    permissions = getattr(user, "guild_permissions", None)
    if permissions is not None and permissions.administrator:
        return True
    return any(r.id == ctx.reviewer_role_id for r in getattr(user, "roles", ()))


def _check_reviewer(ctx: ApplicationContext, interaction: Interaction) -> None:
    if not can_review(ctx, interaction):
        raise HirePermissionError(ctx.text("application.review.no_permission"))


async def _load_pending(ctx: ApplicationContext, record_id: int) -> tuple[discord.Message, SubmissionRecord]:
    message = await ctx.fetch_record_message(record_id)
    if not message.embeds:
        raise RecordUnparsable(f"Record {record_id} has no embed")

    record = SubmissionRecord.from_embed(message.embeds[0], record_id=record_id)
    if record.is_decided:
        raise HireValidationError(ctx.text("application.review.already_decided"))
    return message, record


def _resolve_type(ctx: ApplicationContext, message: discord.Message) -> ApplicationType:
    """The configured type named in the record title; the role to grant comes from it."""
    label = parse_type_label(message.embeds[0].title)
    app_type = ctx.registry.lookup_by_label(label)
    if app_type is None:
        raise ConfigInconsistency(ctx.text("application.review.unknown_type", label=label))
    return app_type


async def _finalize(message: discord.Message, record: SubmissionRecord) -> None:
    """Write the decision into the posted record and drop its decision buttons."""
    try:
        await message.edit(embed=record.apply_to(message.embeds[0]), view=None)
    except discord.HTTPException as ex:
        raise CollaboratorFailure(f"Could not update record {record.record_id}: {ex.text}") from ex


async def _dm_applicant(ctx: ApplicationContext, user, text: str) -> None:
    """Attempt to DM the applicant. Log on Forbidden or NotFound."""
    try:
        if isinstance(user, int):
            user = await ctx.bot.fetch_user(user)
        await user.send(text)
    except (discord.Forbidden, discord.NotFound):
        ctx.log.warning(f"application: could not DM applicant {getattr(user, 'id', user)}, DMs are likely disabled")


async def accept(ctx: ApplicationContext, interaction: Interaction, custom_id: AcceptApplication) -> None:
    """Grant the application type's role, congratulate the applicant and close the record."""
    _check_reviewer(ctx, interaction)
    await interaction.response.defer(ephemeral=True)

    message, record = await _load_pending(ctx, custom_id.record_id)
    app_type = _resolve_type(ctx, message)

    guild = interaction.guild or ctx.bot.get_guild(ctx.guild_id)
    role = guild.get_role(app_type.role_id)
    if role is None:
        raise CollaboratorFailure(
            ctx.text("application.review.role_not_found", role_id=app_type.role_id, label=app_type.label)
        )

    try:
        member = await guild.fetch_member(record.applicant_id)
    except discord.NotFound as ex:
        raise CollaboratorFailure(ctx.text("application.review.member_not_found", user_id=record.applicant_id)) from ex
    except discord.HTTPException as ex:
        raise CollaboratorFailure(f"Could not fetch member {record.applicant_id}: {ex.text}") from ex

    try:
        await member.add_roles(role, reason=f"Application accepted by {interaction.user}")
    except discord.HTTPException as ex:
        raise CollaboratorFailure(ctx.text("application.review.role_failed", role=role.name, member=member)) from ex

    record.accept()
    await _dm_applicant(ctx, member, ctx.text("application.review.congratulations"))
    await _finalize(message, record)
    ctx.log.info(f"application: record {record.record_id} ({app_type.id}) accepted by {interaction.user}")

    await interaction.followup.send(ctx.text("application.review.accepted"), ephemeral=True)


async def request_rejection(ctx: ApplicationContext, interaction: Interaction, custom_id: RejectApplication) -> None:
    """Ask the reviewer for a rejection reason."""
    _check_reviewer(ctx, interaction)
    await interaction.response.send_modal(build_reject_modal(custom_id.record_id, ctx.lang))


async def confirm_rejection(ctx: ApplicationContext, interaction: Interaction, custom_id: RejectModal) -> None:
    """Mark the record rejected with the submitted reason and close it.

    The type named in the title is not looked up, so records of renamed or removed
    types can still be rejected.
    """
    _check_reviewer(ctx, interaction)
    reason = modal_values(interaction.data).get("reason", "")
    if not reason.strip():
        raise HireValidationError(ctx.text("application.review.reason_placeholder"))

    await interaction.response.defer(ephemeral=True)

    try:
        message, record = await _load_pending(ctx, custom_id.record_id)
    except HireException:
        ctx.log.warning(f"application: rejection of record {custom_id.record_id} not applied, reason was {reason!r}")
        raise

    record.reject(reason)
    await _finalize(message, record)
    ctx.log.info(f"application: record {record.record_id} ({record.type_label}) rejected by {interaction.user}")

    await interaction.followup.send(ctx.text("application.review.rejected"), ephemeral=True)

    if ctx.notify_rejection:
        await _dm_applicant(
            ctx,
            record.applicant_id,
            ctx.text("application.review.rejection_notice", label=record.type_label, reason=reason),
        )
