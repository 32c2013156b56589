from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(self, detail: str | None = None):
        if detail:
            self.detail = detail
        super().__init__(self.detail)


class DatabaseError(AppError):
    detail = "Database error"


class MissingFieldsError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, fields: list[str]):
        self.fields = fields
        detail = f"{' & '.join(fields)} required"
        super().__init__(detail)
