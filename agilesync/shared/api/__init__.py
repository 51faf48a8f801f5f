from agilesync.shared.api.response_models import MessageResponse, SuccessResponse

__all__ = ["MessageResponse", "SuccessResponse"]
