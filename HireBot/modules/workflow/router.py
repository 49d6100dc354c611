# -*- coding: utf-8 -*-
"""Route button and modal interactions to the intake or review flow by their custom id."""

from traceback import format_exception

import discord
from discord import Interaction, InteractionType

from modules.workflow import intake, review
from modules.workflow.context import ApplicationContext
from utils.custom_id import (
    AcceptApplication,
    ApplicationModal,
    Apply,
    CustomId,
    RejectApplication,
    RejectModal,
    parse_custom_id,
)
from utils.errors import HireException, HireInfraException, HireUserException
from utils.helpers import error_context, notify_error, send_hidden_message

COMPONENT = "component"
MODAL_SUBMIT = "modal_submit"

_HANDLERS = {
    COMPONENT: {
        Apply: intake.select_type,
        AcceptApplication: review.accept,
        RejectApplication: review.request_rejection,
    },
    MODAL_SUBMIT: {
        ApplicationModal: intake.submit_form,
        RejectModal: review.confirm_rejection,
    },
}

_KINDS = {
    InteractionType.component: COMPONENT,
    InteractionType.modal_submit: MODAL_SUBMIT,
}


def route(kind: str, custom_id: str | None) -> tuple | None:
    """Return ``(handler, variant)`` for an interaction, or ``None`` if it is not ours.

    Buttons and modals of other features share the same event stream, so
    anything unknown is ignored rather than treated as an error.
    """
    variant: CustomId | None = parse_custom_id(custom_id)
    if variant is None:
        return None
    handler = _HANDLERS.get(kind, {}).get(type(variant))
    if handler is None:
        return None
    return handler, variant


async def run_guarded(ctx: ApplicationContext, interaction: Interaction, handler) -> None:
    """Await a workflow step; turn any failure into an ephemeral reply and a log line."""
    err_ctx = error_context(interaction)
    try:
        await handler
    except HireException as ex:
        msg = str(ex)
        if isinstance(ex, HireUserException):
            ctx.log.warning(f"{err_ctx}: {msg}")
        else:
            ctx.log.error(f"{err_ctx}: {msg}")
        await _reply_error(ctx, interaction, msg)
        if isinstance(ex, HireInfraException):
            await notify_error(ctx.bot, err_ctx, ex)
    except Exception as ex:
        ctx.log.error(f"{err_ctx}: {ex.__class__.__name__}: {ex}")
        ctx.log.debug("".join(format_exception(type(ex), ex, ex.__traceback__)))
        await _reply_error(ctx, interaction, ctx.text("common.error_generic"))
        await notify_error(ctx.bot, err_ctx, ex)


async def _reply_error(ctx: ApplicationContext, interaction: Interaction, msg: str) -> None:
    try:
        await send_hidden_message(interaction, msg)
    except discord.HTTPException as ex:
        # interaction may have expired; the log line above still stands
        ctx.log.debug(f"could not deliver error reply: {ex}")


async def dispatch(ctx: ApplicationContext, interaction: Interaction) -> bool:
    """Handle an interaction if it belongs to the application workflow. Returns True if it did."""
    kind = _KINDS.get(interaction.type)
    custom_id = (interaction.data or {}).get("custom_id")
    routed = route(kind, custom_id)
    if routed is None:
        return False

    handler, variant = routed
    ctx.log.debug(f"{error_context(interaction)}: routed to {handler.__module__}.{handler.__name__}")
    await run_guarded(ctx, interaction, handler(ctx, interaction, variant))
    return True
