# -*- coding: utf-8 -*-
"""Application intake cog: the /apply command and the button/modal listener."""

from discord import Interaction, InteractionType, app_commands
from discord.ext.commands import Cog

from modules.workflow import intake
from modules.workflow.router import dispatch, run_guarded
from utils.cog import HireBotCog


@app_commands.guild_only()
class Application(HireBotCog, Cog):
    """cog for the application workflow"""

    def __init__(self, bot):
        super().__init__(bot)
        self.context = bot.application_context

    @app_commands.command(name="apply")
    async def _apply(self, interaction: Interaction):
        """Start the application process"""
        await run_guarded(self.context, interaction, intake.start(self.context, interaction))

    @Cog.listener()
    async def on_interaction(self, interaction: Interaction):
        """Picks up application buttons and modals, including those on messages from before a restart."""
        if interaction.type not in (InteractionType.component, InteractionType.modal_submit):
            return
        await dispatch(self.context, interaction)


async def setup(bot):
    """adds this module to the bot"""
    await bot.add_cog(Application(bot))
