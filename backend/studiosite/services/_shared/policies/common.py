from collections.abc import Iterable


def has_role(*, actor_role, allowed: Iterable[str]) -> bool:
    """Return True if the actor's role is one of ``allowed``."""
    return actor_role is not None and str(actor_role) in {str(role) for role in allowed}
