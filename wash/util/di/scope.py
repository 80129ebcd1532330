"""Custom Dishka scopes for wash."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """wash dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Process lifetime (config, classifier, codecs)
    - UOW: Unit of Work (one pull or push invocation)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
