from agilesync.identity.infrastructure.sessions.registry import (
    DEFAULT_TTL,
    Session,
    SessionRegistry,
    generate_token,
)

__all__ = ["DEFAULT_TTL", "Session", "SessionRegistry", "generate_token"]
