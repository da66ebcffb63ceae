from fastapi import HTTPException, status


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES: machine-readable constants for frontend switch/case
# ═══════════════════════════════════════════════════════════════════════════════
class ErrorCode:
    VALIDATION_ERROR      = "VALIDATION_ERROR"
    UNAUTHORIZED          = "UNAUTHORIZED"
    TOKEN_EXPIRED         = "TOKEN_EXPIRED"
    NOT_FOUND             = "NOT_FOUND"
    METHOD_NOT_ALLOWED    = "METHOD_NOT_ALLOWED"
    DUPLICATE_ENTRY       = "DUPLICATE_ENTRY"
    ACCOUNT_INACTIVE      = "ACCOUNT_INACTIVE"
    INVALID_FILE_TYPE     = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE        = "FILE_TOO_LARGE"
    TOO_MANY_FILES        = "TOO_MANY_FILES"
    DATABASE_ERROR        = "DATABASE_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


# ═══════════════════════════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════════════════════════
class AppException(HTTPException):
    """
    Base exception for all application-level errors.
    Carries a machine-readable error_code for frontend handling.
    """
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        details: list | None = None,
        field: str | None = None,
    ):
        super().__init__(status_code=status_code, detail={
            "message": message,
            "error": {
                "code": error_code,
                "details": details,
                "field": field,
            }
        })

    @property
    def error_code(self) -> str:
        return self.detail["error"]["code"]

    @property
    def message(self) -> str:
        return self.detail["message"]


# ═══════════════════════════════════════════════════════════════════════════════
# CONCRETE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class UnauthorizedException(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, ErrorCode.UNAUTHORIZED)


class TokenExpiredException(AppException):
    def __init__(self):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "Access token has expired", ErrorCode.TOKEN_EXPIRED)


class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", ErrorCode.NOT_FOUND)


class AccountInactiveException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_403_FORBIDDEN,
            "Your account has been deactivated. Contact admin.",
            ErrorCode.ACCOUNT_INACTIVE,
        )


# ─── Uploads ──────────────────────────────────────────────────────────────────
class InvalidFileTypeException(AppException):
    def __init__(self, file_name: str | None = None):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            "Invalid file type. Only JPEG, PNG, GIF and WebP are allowed.",
            ErrorCode.INVALID_FILE_TYPE,
            field=file_name,
        )


class FileTooLargeException(AppException):
    def __init__(self, max_size: int, file_name: str | None = None):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            f"File too large. Maximum size is {max_size // (1024 * 1024)} MB per file.",
            ErrorCode.FILE_TOO_LARGE,
            field=file_name,
        )


class TooManyFilesException(AppException):
    def __init__(self, max_files: int):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            f"Too many files. At most {max_files} images per request.",
            ErrorCode.TOO_MANY_FILES,
        )


# ─── Persistence ──────────────────────────────────────────────────────────────
class DatabaseWriteException(AppException):
    """A multi-row write was rolled back; nothing from it was persisted."""
    def __init__(self, message: str):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, message, ErrorCode.DATABASE_ERROR)
