"""Daily member count summary for a guild."""

from datetime import datetime

NAME = "summary"
DESCRIPTION = "Creates a summary of the server for today."


def _now() -> datetime:
    return datetime.now().astimezone()


async def callback(client, interaction) -> None:
    """
    Reply with how many members the guild gained or lost today.

    The starting count is the last sample taken before midnight, or the
    first sample of today when there is none from earlier.
    """
    guild_id = interaction.guild_id
    if not guild_id:
        raise ValueError("summary can only be used inside a server")

    now = _now()
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    store = client.store
    baseline = await store.latest_before(guild_id, start_of_today)
    if baseline is None:
        baseline = await store.earliest_since(guild_id, start_of_today)
    latest = await store.latest(guild_id)

    if baseline is None or latest is None:
        await interaction.reply("No member data recorded yet.")
        return

    members_start, members_end = baseline.count, latest.count
    trend = "gained" if members_end >= members_start else "lost"
    await interaction.reply(
        f"Summary for {now:%a %b %d %Y}\n"
        f"Today, the server has {trend} {abs(members_end - members_start)} members. "
        f"({members_start} -> {members_end})"
    )
