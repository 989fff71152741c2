class StorageCorruptedError(RuntimeError):
    """A stored collection could not be parsed back into a JSON array."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored collection '{key}' is corrupted: {reason}")


class InvariantViolation(ValueError):
    """Base class for writes the repositories refuse to apply."""


class CourseFullError(InvariantViolation):
    def __init__(self, course_id: str, max_students: int):
        self.course_id = course_id
        self.max_students = max_students
        super().__init__(f"Course {course_id} already has {max_students} students (maximum reached).")


class PaymentExceedsBalanceError(InvariantViolation):
    def __init__(self, enrollment_id: str, amount: float, pending_amount: float):
        self.enrollment_id = enrollment_id
        self.amount = amount
        self.pending_amount = pending_amount
        super().__init__(
            f"Payment of {amount:,.2f} exceeds the pending balance "
            f"{pending_amount:,.2f} of enrollment {enrollment_id}."
        )
