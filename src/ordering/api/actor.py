"""Resolves the calling actor from request headers.

Authentication happens upstream; the gateway forwards the verified identity
as ``X-Actor-Id`` and ``X-Actor-Role``. A request without a usable actor is
rejected with 401 before it reaches the engine.
"""

from fastapi import Depends, Header, HTTPException

from ordering.errors import Forbidden
from ordering.shared.actor import Actor, Role

_ROLES = {role.value for role in Role}


async def current_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_role: str | None = Header(default=None),
) -> Actor:
    if not x_actor_id or not x_actor_id.strip():
        raise HTTPException(status_code=401, detail="Missing actor identity")

    role = (x_actor_role or "").strip().upper()
    if role not in _ROLES:
        raise HTTPException(status_code=401, detail="Missing or unknown actor role")

    return Actor(actor_id=x_actor_id.strip(), role=role)


def require_role(*roles: Role):
    """Dependency that admits only actors holding one of ``roles``."""
    allowed = {role.value for role in roles}

    async def _require(actor: Actor = Depends(current_actor)) -> Actor:
        if actor.role not in allowed:
            raise Forbidden(f"This endpoint requires role {' or '.join(sorted(allowed))}")
        return actor

    return _require
