"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Expense
  3xxx: Balance/Cache
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "A user with that email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid email or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


# --- 2xxx: Expense ---

class InvalidParticipantsError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2001, f"Invalid participants: {detail}", 422)


class UnknownParticipantError(AppError):
    def __init__(self, user_ids: list[int]) -> None:
        ids = ", ".join(str(u) for u in user_ids)
        super().__init__(2002, f"Unknown participant user ids: {ids}", 422)


class InvalidExpenseError(AppError):
    """Ledger input that should have been rejected upstream."""

    def __init__(self, expense_id: int | None, detail: str) -> None:
        super().__init__(2003, f"Invalid expense {expense_id}: {detail}", 500)


# --- 3xxx: Balance/Cache ---

class CacheUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3001, f"Balance cache unavailable: {detail}", 503)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
