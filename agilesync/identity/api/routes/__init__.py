from agilesync.identity.api.routes.admin import router as admin_router
from agilesync.identity.api.routes.identity import router as identity_router

__all__ = ["admin_router", "identity_router"]
