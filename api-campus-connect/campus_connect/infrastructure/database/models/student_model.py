# campus_connect/infrastructure/database/models/student_model.py

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from campus_connect.infrastructure.database.base_model import BaseModel, BigIntPK


class StudentModel(BaseModel):
    # roster de alunos, populado por importação externa
    __tablename__ = "tbStudents"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)

    student_id: Mapped[str] = mapped_column(String(50), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    department: Mapped[str] = mapped_column(String(50), nullable=True)
    year: Mapped[str] = mapped_column(String(10), nullable=True)
