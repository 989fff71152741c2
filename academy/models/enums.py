import enum


class CourseStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    completed = "completed"


class DocumentType(str, enum.Enum):
    dni = "dni"
    passport = "passport"
    other = "other"


class EnrollmentStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    dropped = "dropped"


class PaymentMethod(str, enum.Enum):
    cash = "cash"
    transfer = "transfer"
    card = "card"
    other = "other"
