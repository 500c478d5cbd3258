"""
Nucleus - Internal API for the Nucleus community bot

A small service that authorizes calls into the bot's internal API and
dispatches them to named handlers.

Architecture:
- Each module is self-contained with clear interfaces
- One long-lived client object owns every module instance
- No module knows the internals of another

Modules:
- auth: Rotating credential derivation and validation
- dispatch: Command and lifecycle handler registry and dispatch
- storage: Member count persistence (opaque store)
- api: REST API models
"""

__version__ = "1.0.0"
