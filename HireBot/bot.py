# -*- coding: utf-8 -*-
"""
Main Class of the HireBot
"""

import os
from asyncio import run
from pathlib import Path
from traceback import format_exc
from typing import Annotated, Optional
from warnings import filterwarnings

import typer
import yaml
from discord import ClientException, Game, Intents, Interaction, LoginFailure, Object, app_commands
from discord.ext.commands import Bot, ExtensionFailed

from modules.workflow.context import ApplicationContext
from utils import logging
from utils.error_throttle import ErrorThrottle
from utils.errors import HireException, HireInfraException
from utils.helpers import error_context, notify_error, parse_id, send_hidden_message
from utils.strings import get_string, load_strings


class HireBot(Bot):
    """Discord Bot"""

    def __init__(self, config: dict, intents: Intents, debug: bool):
        super().__init__(
            command_prefix="",
            description="HireBot - applications in, decisions out.",
            intents=intents,
            help_command=None,
        )

        self.config = config
        self.debug = debug
        self.token = config["bot"].get("token")
        self.ops = [parse_id(op) for op in config["bot"].get("ops", [])]
        self.modules = config["bot"].get("modules", ["application"])
        self.log = logging.get_logger("hirebot")

        self.error_throttle = ErrorThrottle()
        recipients = config.get("notifications", {}).get("error_recipients")
        self.error_recipients = [parse_id(r) for r in recipients] if recipients else list(self.ops)

        # read-only for the lifetime of the process, handed to every workflow handler
        self.application_context = ApplicationContext.from_config(self, config)

    async def setup_hook(self) -> None:
        """
        Discord Bot setup_hook
        Loads Modules and syncs the slash commands to the configured guild
        """
        self.tree.on_error = self._on_app_command_error

        # load localization strings
        load_strings()

        # load modules
        for module in self.modules:
            try:
                await self.load_extension(f"modules.{module}")
            except (ImportError, ExtensionFailed, ClientException) as e:
                self.log.error(f"failed to load extension {module}. {e}")
                self.log.debug(format_exc())

        guild = Object(id=self.application_context.guild_id)
        self.tree.copy_global_to(guild=guild)
        synced = await self.tree.sync(guild=guild)
        self.log.info(f"Synced {len(synced)} commands to guild {guild.id}")

    async def on_ready(self) -> None:
        """calls when successfully logged in"""
        self.log.info(f"Logged in as {self.user} (ID: {self.user.id})")
        if self.get_guild(self.application_context.guild_id) is None:
            self.log.warning(f"configured guild {self.application_context.guild_id} is not available to the bot")

    # noinspection PyUnusedLocal
    async def on_app_command_completion(self, interaction: Interaction, command: app_commands.Command) -> None:
        """Log successful slash command invocations."""
        self.log.debug(error_context(interaction))

    async def _on_app_command_error(self, interaction: Interaction, error: app_commands.AppCommandError) -> None:
        """Handle errors from slash commands that escaped the workflow's own error handling."""
        err_ctx = error_context(interaction)

        if isinstance(error, app_commands.CheckFailure):
            msg = str(error)
            self.log.warning(f"{err_ctx}: {msg}")
            await send_hidden_message(interaction, msg)
        elif isinstance(error, app_commands.CommandInvokeError):
            if isinstance(error.original, HireException):
                err_msg = str(error.original)
                self.log.error(f"{err_ctx}: {err_msg}")
                await send_hidden_message(interaction, err_msg)
                if isinstance(error.original, HireInfraException):
                    await notify_error(self, err_ctx, error.original)
            else:
                self.log.error(f"{err_ctx}: {error.original.__class__.__name__}: {error.original}")
                msg = get_string(self.application_context.lang, "common.error_generic")
                await send_hidden_message(interaction, msg)
                await notify_error(self, err_ctx, error.original)
        else:
            self.log.error(f"{err_ctx}: {error}")

    async def start(self, token: str = None, reconnect: bool = True) -> None:
        """
        generator connects the discord bot to the server

        :param token: str
        :param reconnect: bool
        """
        self.log.info("Logging into Discord...")
        if self.token:
            self.activity = Game(name="/apply")
            await self.login(self.token)
        else:
            self.log.critical("No credentials available to login.")
            raise RuntimeError()
        await self.connect(reconnect=reconnect)


def get_intents() -> Intents:
    intents = Intents.default()
    intents.members = True
    return intents


def _csv(value: str) -> list[str]:
    return [x.strip() for x in value.split(",") if x.strip()]


def _to_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


def _set_nested(d: dict, keys: list[str], value) -> None:
    for key in keys[:-1]:
        d = d.setdefault(key, {})
    d[keys[-1]] = value


def parse_env_config() -> dict:
    """Read HIREBOT_* environment variables and return a config dict."""
    env: dict = {}
    mappings = [
        ("HIREBOT_TOKEN", ["bot", "token"], str),
        ("HIREBOT_OPS", ["bot", "ops"], _csv),
        ("HIREBOT_MODULES", ["bot", "modules"], _csv),
        ("HIREBOT_GUILD_ID", ["application", "guild_id"], str),
        ("HIREBOT_COMMAND_CHANNEL_ID", ["application", "command_channel_id"], str),
        ("HIREBOT_APPLICATIONS_CHANNEL_ID", ["application", "applications_channel_id"], str),
        ("HIREBOT_REVIEWER_ROLE_ID", ["application", "reviewer_role_id"], str),
        ("HIREBOT_NOTIFY_REJECTION", ["application", "notify_rejection"], _to_bool),
        ("HIREBOT_ERROR_RECIPIENTS", ["notifications", "error_recipients"], _csv),
    ]
    for var_name, keys, converter in mappings:
        value = os.environ.get(var_name)
        if value:
            _set_nested(env, keys, converter(value))
    return env


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base; override wins on conflicts."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def parse_config(config_path: Optional[Path] = None) -> dict:
    config = {}
    path = config_path or Path("./config.yaml")
    if path.exists():
        with open(path) as stream:
            try:
                config = yaml.safe_load(stream) or {}
            except yaml.YAMLError as exc:
                print(f"Error in configuration file: {exc}")
    return deep_merge(config, parse_env_config())


app = typer.Typer(add_completion=False)


@app.command()
def main(
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Config file path")] = None,
    debug: Annotated[bool, typer.Option("--debug", "-d", help="Enable debug logging")] = False,
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Log level (DEBUG, INFO, WARNING, ERROR)")] = "INFO",
    verbosity: Annotated[int, typer.Option("--verbosity", "-v", help="Verbosity: 1=DEBUG, 2=+discord")] = 0,
) -> None:
    """HireBot: application intake and review for Discord."""
    filterwarnings("ignore", category=DeprecationWarning, module=r"discord\.http")

    resolved_config = parse_config(config)
    intents = get_intents()

    is_debug = debug or str(loglevel).upper() == "DEBUG" or verbosity > 0
    loggers = ["hirebot"]
    if verbosity >= 2:
        loggers.append("discord")

    if "bot" in resolved_config:
        resolved_loglevel = "DEBUG" if (debug or verbosity > 0) else loglevel
        for logger_name in loggers:
            logging.create_logger(resolved_loglevel, logger_name)
        bot = HireBot(resolved_config, intents, is_debug)

        try:
            run(bot.start())
        except LoginFailure:
            bot.log.error(format_exc())
            bot.log.error("Failed to login")
        except KeyboardInterrupt:
            bot.log.info("Received KeyboardInterrupt, shutting down.")
    else:
        raise HireInfraException("Bot config not found.")


if __name__ == "__main__":
    app()
