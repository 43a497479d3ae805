# ecolepro/core/exceptions.py
"""Custom exceptions for the EcolePro application."""
from fastapi import HTTPException
from typing import Any, Dict, Optional


class EcoleProException(HTTPException):
    """Base exception for EcolePro application."""
    def __init__(
        self,
        status_code: int,
        detail: Any,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class SchoolNotFound(EcoleProException):
    """Exception raised when a school is not found."""
    def __init__(self, school_id: Optional[str] = None):
        message = "School not found"
        if school_id:
            message += f" with id: {school_id}"
        super().__init__(status_code=404, detail=message)


class NoSchoolAvailable(EcoleProException):
    """Raised when the session resolves to no school at all."""
    def __init__(self):
        super().__init__(
            status_code=404,
            detail={
                "error": "No School Available",
                "message": "No school is linked to this session and the store holds no school"
            }
        )


class UserNotFound(EcoleProException):
    def __init__(self, user_id: str):
        super().__init__(status_code=404, detail=f"System user not found with id: {user_id}")


class ValidationError(EcoleProException):
    """Exception raised for validation errors."""
    def __init__(self, message: str, field: Optional[str] = None):
        detail = {"error": "Validation Error", "message": message}
        if field:
            detail["field"] = field
        super().__init__(status_code=422, detail=detail)


class IncorrectPin(EcoleProException):
    def __init__(self):
        super().__init__(
            status_code=403,
            detail={"error": "Incorrect PIN", "message": "L'ancien code PIN est incorrect."}
        )


class PinMismatch(EcoleProException):
    def __init__(self):
        super().__init__(
            status_code=400,
            detail={"error": "PIN Mismatch", "message": "Les nouveaux codes PIN ne correspondent pas."}
        )


class InvalidPinFormat(EcoleProException):
    def __init__(self):
        super().__init__(
            status_code=422,
            detail={"error": "Invalid PIN Format", "message": "Le code PIN doit être composé de 4 chiffres."}
        )


class DuplicateSubjectError(EcoleProException):
    """Exception raised when a subject name is already in the list."""
    def __init__(self, subject: str):
        super().__init__(
            status_code=409,
            detail={
                "error": "Duplicate subject",
                "message": "Cette matière existe déjà.",
                "value": subject
            }
        )


class InvalidPermissionError(EcoleProException):
    """Raised when a role/permission mapping references unknown identifiers."""
    def __init__(self, message: str, value: Optional[str] = None):
        detail = {"error": "Invalid Permission", "message": message}
        if value is not None:
            detail["value"] = value
        super().__init__(status_code=422, detail=detail)


class UnsupportedRestoreFormat(EcoleProException):
    def __init__(self, format_name: str = "SQL"):
        super().__init__(
            status_code=415,
            detail={
                "error": "Unsupported Restore Format",
                "message": f"Restoring from a {format_name} export is not supported. Use a JSON backup."
            }
        )


class SessionRequired(EcoleProException):
    def __init__(self, message: str = "Missing session headers"):
        super().__init__(status_code=401, detail=message)


class InsufficientRole(EcoleProException):
    def __init__(self, message: str = "Insufficient role privileges"):
        super().__init__(status_code=403, detail=message)
