from pydantic import BaseModel

__all__ = ["SuccessResponse"]


class SuccessResponse(BaseModel):
    success: bool = True
