from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from .timer import AlreadyActive, NoActiveSession, utc_now
from .wellness import SYMPTOMS, WATER_SERVING_ML

if TYPE_CHECKING:
    from .main import CheckinBot


def register_commands(bot: CheckinBot) -> None:
    """Register all slash commands on the bot. Called once during setup."""
    guild_scope = discord.Object(id=bot.config.guild_id)

    async def reply(interaction: discord.Interaction, content: str) -> None:
        await interaction.response.send_message(
            content,
            ephemeral=True,
            allowed_mentions=discord.AllowedMentions.none(),
        )

    @bot.tree.command(name="checkin", description="Start a gym session", guild=guild_scope)
    async def checkin(interaction: discord.Interaction) -> None:
        try:
            message = bot.check_in_member(str(interaction.user.id))
        except AlreadyActive:
            message = "You already have an active session. Use /checkout to finish it."
        await reply(interaction, message)

    @bot.tree.command(name="checkout", description="Finish your current gym session", guild=guild_scope)
    async def checkout(interaction: discord.Interaction) -> None:
        try:
            message = bot.check_out_member(str(interaction.user.id))
        except NoActiveSession:
            message = "You have no active session. Use /checkin to start one."
        await reply(interaction, message)

    @bot.tree.command(name="attendance", description="Show your attendance calendar and history", guild=guild_scope)
    async def attendance(interaction: discord.Interaction) -> None:
        content = bot.attendance_card(
            str(interaction.user.id),
            interaction.user.display_name,
            now=utc_now(),
        )
        await reply(interaction, content)

    @bot.tree.command(name="food", description="Log a meal and see today's macro totals", guild=guild_scope)
    @app_commands.describe(calories="kcal", protein="grams", carbs="grams", fat="grams")
    async def food(
        interaction: discord.Interaction,
        name: str,
        calories: app_commands.Range[float, 0],
        protein: app_commands.Range[float, 0] = 0.0,
        carbs: app_commands.Range[float, 0] = 0.0,
        fat: app_commands.Range[float, 0] = 0.0,
    ) -> None:
        message = bot.log_food_member(
            str(interaction.user.id),
            name,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
        )
        await reply(interaction, message)

    @bot.tree.command(name="water", description="Log water intake", guild=guild_scope)
    async def water(
        interaction: discord.Interaction,
        amount_ml: app_commands.Range[int, 1] = WATER_SERVING_ML,
    ) -> None:
        await reply(interaction, bot.log_water_member(str(interaction.user.id), amount_ml))

    @bot.tree.command(name="mood", description="Journal how you feel today", guild=guild_scope)
    async def mood(
        interaction: discord.Interaction,
        rating: app_commands.Range[int, 1, 5],
        note: str = "",
    ) -> None:
        await reply(interaction, bot.log_mood_member(str(interaction.user.id), rating, note))

    @bot.tree.command(name="symptom", description="Toggle a cycle symptom for today", guild=guild_scope)
    @app_commands.choices(symptom=[app_commands.Choice(name=item, value=item) for item in SYMPTOMS])
    async def symptom(interaction: discord.Interaction, symptom: app_commands.Choice[str]) -> None:
        await reply(interaction, bot.toggle_symptom_member(str(interaction.user.id), symptom.value))

    @bot.tree.command(name="status", description="Show bot status", guild=guild_scope)
    async def status(interaction: discord.Interaction) -> None:
        now_local = utc_now().astimezone(bot.config.timezone)
        lines = [
            "Check-in tracker status: online",
            f"Guild ID: `{bot.config.guild_id}`",
            f"Timezone: `{bot.config.timezone.key}`",
            f"Current local time: `{now_local.isoformat()}`",
            f"Monthly goal: `{bot.config.goal_sessions}` sessions",
            f"Active sessions: `{bot.active_session_count()}`",
        ]
        await reply(interaction, "\n".join(lines))
