# campus_connect/repositories/student_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_connect.core.base_repository import BaseRepository
from campus_connect.infrastructure.database.models.student_model import StudentModel


class StudentRepository(BaseRepository[StudentModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> StudentModel | None:
        stmt = select(StudentModel).where(StudentModel.email == email)
        return self._session.execute(stmt).scalar_one_or_none()
