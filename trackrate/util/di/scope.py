"""Custom Dishka scopes for TrackRate."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, session factory, config-derived singletons)
    - UOW: Unit of Work (one HTTP request or one CLI operation)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
