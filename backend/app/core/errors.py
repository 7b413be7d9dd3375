# backend/app/core/errors.py
"""
Application error taxonomy.

Services raise these; the handlers registered in ``app.main`` turn them into
the standard ``fail()`` envelope. Nothing here is retried.
"""
from typing import Dict, List, Optional


class AppError(Exception):
    status_code = 400

    def __init__(self, message: str, meta: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.meta = meta or {}


class ValidationFailed(AppError):
    """One or more fields failed declarative rules."""
    status_code = 422

    def __init__(self, field_errors: Dict[str, List[str]], message: str = "Invalid fields"):
        super().__init__(message, meta={"fieldErrors": field_errors})
        self.field_errors = field_errors


class NotFound(AppError):
    status_code = 404


class StoreError(AppError):
    """The database rejected a read or write."""
    status_code = 500


class AuthRequired(AppError):
    status_code = 401

    def __init__(self, message: str = "Authentication required", sign_in: str = "/auth/login"):
        super().__init__(message, meta={"signIn": sign_in})
