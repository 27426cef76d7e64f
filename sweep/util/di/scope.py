"""Custom Dishka scopes for Sweep."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Sweep dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (clients, event bus, cleanup services)
    - UOW: Unit of Work (one HTTP request: DB session, current user)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
