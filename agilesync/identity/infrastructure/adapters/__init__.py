from agilesync.identity.infrastructure.adapters.password_service import PasswordService

__all__ = ["PasswordService"]
