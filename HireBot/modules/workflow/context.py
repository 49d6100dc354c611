# -*- coding: utf-8 -*-
"""Everything a workflow handler needs, built once at startup and handed to each handler."""

from dataclasses import dataclass

import discord

from models.application import ApplicationRegistry
from utils.errors import CollaboratorFailure, ConfigInconsistency, RecordNotFound
from utils.helpers import parse_id
from utils.strings import get_string


@dataclass(frozen=True)
class ApplicationContext:
    bot: discord.Client
    registry: ApplicationRegistry
    guild_id: int
    command_channel_id: int
    applications_channel_id: int
    reviewer_role_id: int | None = None
    notify_rejection: bool = False
    lang: str = "en"

    @classmethod
    def from_config(cls, bot, config: dict) -> "ApplicationContext":
        """Build the context from the ``application`` section of the bot config."""
        section = config.get("application")
        if not section:
            raise ConfigInconsistency("application config not found")

        try:
            guild_id = parse_id(section["guild_id"])
            command_channel_id = parse_id(section["command_channel_id"])
            applications_channel_id = parse_id(section["applications_channel_id"])
        except KeyError as ex:
            raise ConfigInconsistency(f"application config: missing '{ex.args[0]}'") from ex
        except (TypeError, ValueError) as ex:
            raise ConfigInconsistency(f"application config: {ex}") from ex

        reviewer_role_id = section.get("reviewer_role_id")
        return cls(
            bot=bot,
            registry=ApplicationRegistry.from_config(section.get("types")),
            guild_id=guild_id,
            command_channel_id=command_channel_id,
            applications_channel_id=applications_channel_id,
            reviewer_role_id=parse_id(reviewer_role_id) if reviewer_role_id else None,
            notify_rejection=bool(section.get("notify_rejection", False)),
            lang=section.get("language", "en"),
        )

    @property
    def log(self):
        return self.bot.log

    def text(self, key: str, **kwargs) -> str:
        return get_string(self.lang, key, **kwargs)

    async def _channel(self, channel_id: int):
        channel = self.bot.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self.bot.fetch_channel(channel_id)
        except (discord.NotFound, discord.Forbidden) as ex:
            raise ConfigInconsistency(self.text("common.channel_not_found", channel_id=channel_id)) from ex

    async def command_channel(self):
        return await self._channel(self.command_channel_id)

    async def applications_channel(self):
        return await self._channel(self.applications_channel_id)

    async def fetch_record_message(self, record_id: int) -> discord.Message:
        """Fetch a rendered submission record from the applications channel."""
        channel = await self.applications_channel()
        try:
            return await channel.fetch_message(record_id)
        except discord.NotFound as ex:
            raise RecordNotFound(self.text("application.review.not_found", record_id=record_id)) from ex
        except discord.HTTPException as ex:
            reason = self.text("application.review.not_found", record_id=record_id)
            raise CollaboratorFailure(f"{reason} {ex.text}") from ex
