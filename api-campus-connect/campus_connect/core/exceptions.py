# campus_connect/core/exceptions.py

class AppError(Exception):
    code = "AppError"

    def __init__(self, message: str, *, status_code: int = 400, code: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        if code is not None:
            self.code = code


class BadRequestError(AppError):
    code = "BadRequest"

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=400)


class NotFoundError(AppError):
    code = "NotFound"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class ConflictError(AppError):
    code = "Conflict"

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=409)


class UnauthorizedError(AppError):
    code = "Unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    code = "Forbidden"

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=403)


# -------------------------
# Sessão / tokens
# -------------------------

class NoTokenError(UnauthorizedError):
    code = "NoToken"

    def __init__(self, message: str = "No token provided") -> None:
        super().__init__(message)


class InvalidTokenError(ForbiddenError):
    """Assinatura, claims ou tipo inválidos. Recuperável uma vez via refresh."""

    code = "InvalidToken"

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    code = "TokenExpired"

    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


class RefreshNotRecognizedError(ForbiddenError):
    """Refresh válido na assinatura, mas não é mais o armazenado para o usuário."""

    code = "RefreshNotRecognized"

    def __init__(self, message: str = "Refresh token not recognized") -> None:
        super().__init__(message)


# -------------------------
# Cadastro / login
# -------------------------

class ForbiddenDomainError(ForbiddenError):
    code = "ForbiddenDomain"

    def __init__(self, message: str = "Only college email IDs are allowed") -> None:
        super().__init__(message)


class NotAStudentError(ForbiddenError):
    code = "NotAStudent"

    def __init__(self, message: str = "Access denied. Not a registered student.") -> None:
        super().__init__(message)


class AlreadyRegisteredError(ConflictError):
    code = "AlreadyRegistered"

    def __init__(self, message: str = "User already registered. Please login instead.") -> None:
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    code = "UserNotFound"

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    code = "InvalidCredentials"

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class DatabaseError(AppError):
    code = "DatabaseError"

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, status_code=500)
