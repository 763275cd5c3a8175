"""Custom exception classes"""
from decimal import Decimal
from typing import Any, List, Optional


class AppException(Exception):
    """Base exception for application errors"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "AppError",
        details: Optional[Any] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Validation error exception"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_type="ValidationError",
            details=details
        )


class NotFoundError(AppException):
    """Resource not found exception"""

    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=404,
            error_type="NotFoundError",
            details=details
        )


class DatabaseError(AppException):
    """Database operation error exception"""

    def __init__(self, message: str = "Database error occurred", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_type="DatabaseError",
            details=details
        )


class PersistenceError(DatabaseError):
    """Allocation store could not save or load allocations"""

    def __init__(self, message: str = "Could not save allocations", details: Optional[Any] = None):
        super().__init__(message=message, details=details)
        self.error_type = "PersistenceError"


# Allocation validation errors. Raised by AllocationEngine.validate and
# carried inside a failed SubmitResult.

class AllocationValidationError(ValidationError):
    """Base class for errors that block an allocation submit"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message=message, details=details)
        self.error_type = type(self).__name__


class EmptyAllocationError(AllocationValidationError):
    """No line items to save"""

    def __init__(self, message: str = "No allocation items to save."):
        super().__init__(message)


class PercentMismatchError(AllocationValidationError):
    """Percentages do not add up to 100"""

    def __init__(self, actual: Decimal):
        self.actual = actual
        super().__init__(
            f"Total percentage must equal 100%. Current: {actual:.2f}%",
            details={"actual": str(actual), "expected": "100"},
        )


class AmountMismatchError(AllocationValidationError):
    """Amounts do not add up to the expense total"""

    def __init__(self, actual: Decimal, expected: Decimal):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Total amount must equal {expected:.2f}. Current: {actual:.2f}",
            details={"actual": str(actual), "expected": str(expected)},
        )


class MissingDescriptionError(AllocationValidationError):
    """One or more line items have a blank description"""

    def __init__(self, indexes: List[int]):
        self.indexes = indexes
        super().__init__(
            "All items must have a description",
            details={"indexes": indexes},
        )
