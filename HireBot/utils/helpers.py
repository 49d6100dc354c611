# -*- coding: utf-8 -*-

from traceback import format_exception

from discord import Forbidden, HTTPException, Interaction, NotFound


def parse_id(value) -> int:
    """Convert a Discord snowflake given as int or str (YAML, env) to int."""
    return int(value)


async def send_hidden_message(interaction: Interaction, msg: str, **kwargs) -> None:
    """Send an ephemeral message, choosing response vs followup based on whether the response is used."""
    if not interaction.response.is_done():
        await interaction.response.send_message(msg, ephemeral=True, **kwargs)
    else:
        await interaction.followup.send(msg, ephemeral=True, **kwargs)


def error_context(interaction: Interaction) -> str:
    """Describe who triggered what, for log lines and operator notifications.

    Slash commands render as ``/name``; buttons and modals render their custom id.
    """
    guild = interaction.guild
    where = f"[{guild.name} ({guild.id})]" if guild is not None else "[DM]"

    command = getattr(interaction, "command", None)
    data = getattr(interaction, "data", None)
    if command is not None:
        what = f"/{command.qualified_name}"
    elif isinstance(data, dict) and data.get("custom_id"):
        what = data["custom_id"]
    else:
        what = "/unknown"

    return f"{where} {interaction.user} ({interaction.user.id}) -> {what}"


async def notify_error(bot, context: str, error: Exception) -> None:
    """DM the configured error recipients about an infrastructure failure (throttled)."""
    skipped = bot.error_throttle.suppressed_count(context, error)
    if not bot.error_throttle.should_notify(context, error):
        bot.log.debug(f"suppressed error notification for {context}")
        return

    trace = "".join(format_exception(type(error), error, error.__traceback__))
    # Discord message limit is 2000 characters
    body = f"**Error** {context}\n```py\n{trace[-1800:]}\n```"
    if skipped:
        body += f"\n{skipped} similar error(s) were suppressed since the last report."

    for recipient_id in bot.error_recipients:
        try:
            user = await bot.fetch_user(recipient_id)
            await user.send(body)
        except (Forbidden, NotFound, HTTPException) as ex:
            bot.log.debug(f"Could not DM error notification to {recipient_id}: {ex}")
