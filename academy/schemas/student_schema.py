from datetime import date, datetime
from typing import Optional
from pydantic import Field
from academy.models.enums import DocumentType
from academy.schemas.base_schema import CamelModel

class StudentBase(CamelModel):
    first_name: str = Field(..., examples=["Ana"])
    last_name: str = Field(..., examples=["Martinez"])
    email: str = Field(..., examples=["ana.martinez@email.com"])
    phone: str = Field(..., examples=["+54 11 1234-5678"])
    document: str = Field(..., examples=["12345678"])
    document_type: DocumentType = DocumentType.dni
    address: str = ""
    birth_date: Optional[date] = Field(None, examples=["1995-05-15"])
    emergency_contact: str = ""
    emergency_phone: str = ""

class StudentCreate(StudentBase):
    pass

class StudentUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    document: Optional[str] = None
    document_type: Optional[DocumentType] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None

class Student(StudentBase):
    id: str
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
