from datetime import UTC, datetime

NAME = "ping"
DESCRIPTION = "Checks that the bot is responsive."


async def callback(client, interaction) -> None:
    latency_ms = int((datetime.now(UTC) - interaction.created_at).total_seconds() * 1000)
    await interaction.reply(f"Pong! ({latency_ms}ms)")
