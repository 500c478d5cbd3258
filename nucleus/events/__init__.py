"""
Lifecycle event handlers.

Each event module exposes EVENT, ONCE, INTERNAL and an async
callback(client, *args). INTERNAL events are announced only by the
application itself and cannot be emitted over the API.
Every subscriber is listed here explicitly; there is no discovery.
"""

from functools import partial

from . import member_count, ready, shutdown

EVENTS = (ready, member_count, shutdown)

RESERVED_EVENTS = frozenset(module.EVENT for module in EVENTS if module.INTERNAL)


def register_events(client) -> None:
    """Subscribe every event handler with the client's registry."""
    for module in EVENTS:
        client.registry.subscribe(
            module.EVENT,
            partial(module.callback, client),
            once=module.ONCE,
            name=module.__name__.rsplit(".", 1)[-1],
        )
