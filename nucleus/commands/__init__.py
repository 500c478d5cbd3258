"""
Command handlers.

Each command module exposes NAME, DESCRIPTION and an async
callback(client, interaction). Every command is listed here explicitly;
adding one means editing COMMANDS.
"""

from functools import partial

from . import ping, summary

COMMANDS = (ping, summary)


def register_commands(client) -> None:
    """Register every command with the client's registry."""
    for command in COMMANDS:
        client.registry.register_command(
            command.NAME, partial(command.callback, client), command.DESCRIPTION
        )
