# -*- coding: utf-8 -*-
"""Shared pytest fixtures for HireBot test suite"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

# Add HireBot to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent / "HireBot"))

from models.application import ApplicationRegistry
from modules.workflow.context import ApplicationContext
from utils.error_throttle import ErrorThrottle
from utils.strings import load_strings

GUILD_ID = 987654321
COMMAND_CHANNEL_ID = 111000111
APPLICATIONS_CHANNEL_ID = 222000222
BACKEND_ROLE_ID = 555000555
DESIGN_ROLE_ID = 555000666
APPLICANT_ID = 123
RECORD_ID = 987654

TYPES_CONFIG = [
    {
        "id": "backend",
        "label": "Backend Developer",
        "color": "primary",
        "role": BACKEND_ROLE_ID,
        "fields": [
            {"id": "experience", "label": "Experience", "style": "paragraph", "placeholder": "Tell us"},
            {"id": "github", "label": "GitHub", "style": "short", "required": False},
        ],
    },
    {
        "id": "design",
        "label": "Designer",
        "color": "success",
        "role": DESIGN_ROLE_ID,
        "fields": [{"id": "portfolio", "label": "Portfolio", "placeholder": "https://"}],
    },
]


@pytest.fixture(autouse=True)
def _load_locale_strings():
    load_strings()


@pytest.fixture
def registry():
    return ApplicationRegistry.from_config(TYPES_CONFIG)


@pytest.fixture
def mock_log():
    """Mock logger that can be attached to bot."""
    log = MagicMock()
    log.info = MagicMock()
    log.debug = MagicMock()
    log.warning = MagicMock()
    log.error = MagicMock()
    return log


@pytest.fixture
def command_channel():
    channel = MagicMock()
    channel.id = COMMAND_CHANNEL_ID
    channel.send = AsyncMock()
    return channel


@pytest.fixture
def applications_channel():
    """Channel whose send() returns a fresh record message with id RECORD_ID."""
    channel = MagicMock()
    channel.id = APPLICATIONS_CHANNEL_ID
    sent = MagicMock()
    sent.id = RECORD_ID
    sent.edit = AsyncMock()
    channel.send = AsyncMock(return_value=sent)
    channel.fetch_message = AsyncMock()
    return channel


@pytest.fixture
def mock_bot(mock_log, command_channel, applications_channel):
    """Create a mock bot that resolves the two configured channels."""
    bot = MagicMock()
    bot.log = mock_log
    channels = {COMMAND_CHANNEL_ID: command_channel, APPLICATIONS_CHANNEL_ID: applications_channel}
    bot.get_channel = MagicMock(side_effect=channels.get)
    bot.fetch_channel = AsyncMock()
    bot.fetch_user = AsyncMock()
    bot.error_throttle = ErrorThrottle()
    bot.error_recipients = []
    return bot


@pytest.fixture
def app_context(mock_bot, registry):
    return ApplicationContext(
        bot=mock_bot,
        registry=registry,
        guild_id=GUILD_ID,
        command_channel_id=COMMAND_CHANNEL_ID,
        applications_channel_id=APPLICATIONS_CHANNEL_ID,
    )


@pytest.fixture
def mock_member():
    """Create a mock discord.Member."""
    member = MagicMock()
    member.id = APPLICANT_ID
    member.name = "alice"
    member.__str__ = lambda self: "alice#0001"
    member.add_roles = AsyncMock()
    member.send = AsyncMock()
    return member


@pytest.fixture
def backend_role():
    role = MagicMock()
    role.id = BACKEND_ROLE_ID
    role.name = "Backend"
    return role


@pytest.fixture
def mock_guild(mock_member, backend_role):
    """Create a mock discord.Guild that knows the applicant and the backend role."""
    guild = MagicMock()
    guild.id = GUILD_ID
    guild.name = "Test Guild"
    guild.get_role = MagicMock(side_effect=lambda rid: backend_role if rid == BACKEND_ROLE_ID else None)
    guild.fetch_member = AsyncMock(return_value=mock_member)
    return guild


@pytest.fixture
def mock_interaction(mock_bot, mock_member, mock_guild):
    """Create a mock discord Interaction whose response flips ``is_done`` once used."""
    interaction = MagicMock()
    interaction.client = mock_bot
    interaction.user = mock_member
    interaction.user.guild_permissions = MagicMock()
    interaction.user.guild_permissions.administrator = False
    interaction.user.roles = []
    interaction.guild = mock_guild
    interaction.guild_id = mock_guild.id
    interaction.command = None
    interaction.type = discord.InteractionType.component
    interaction.data = {}

    done = {"value": False}

    async def _respond(*_args, **_kwargs):
        done["value"] = True

    interaction.response = MagicMock()
    interaction.response.send_message = AsyncMock(side_effect=_respond)
    interaction.response.send_modal = AsyncMock(side_effect=_respond)
    interaction.response.defer = AsyncMock(side_effect=_respond)
    interaction.response.is_done = MagicMock(side_effect=lambda: done["value"])
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    return interaction


def http_error(cls, status: int, text: str = "error"):
    """Build a discord.HTTPException subclass instance without a real response."""
    response = MagicMock()
    response.status = status
    response.reason = text
    return cls(response, text)
