from .base_model import Base
from .collection_model import Collection
from .enums import CourseStatus, DocumentType, EnrollmentStatus, PaymentMethod
