"""Factory Boy factories wired to the test SQLAlchemy session."""

from __future__ import annotations

import factory

from campus_connect.infrastructure.database.models.post_model import PostModel
from campus_connect.infrastructure.database.models.student_model import StudentModel
from campus_connect.infrastructure.database.models.user_model import UserModel
from campus_connect.infrastructure.security.password_hasher import ALGO, PasswordHasher

DEFAULT_PASSWORD = "Passw0rd!"


class SQLAlchemySession:
    """Store the session provided by the pytest fixture layer."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        # a API abre sessões próprias: os dados precisam estar commitados
        sqlalchemy_session_persistence = "commit"


class StudentFactory(BaseFactory):
    """Roster row; signup only accepts emails present here."""

    class Meta:
        model = StudentModel

    id = None
    student_id = factory.Sequence(lambda n: f"RU{n:05d}")
    name = factory.Sequence(lambda n: f"Student {n}")
    email = factory.Sequence(lambda n: f"student{n}.2024@rishihood.edu.in")
    department = "Computer Science"
    year = "2024"


class UserFactory(BaseFactory):
    """Registered user with a real PBKDF2 password hash."""

    class Meta:
        model = UserModel

    id = None
    name = factory.Sequence(lambda n: f"User {n}")
    email = factory.Sequence(lambda n: f"user{n}.2024@rishihood.edu.in")
    password = DEFAULT_PASSWORD

    password_algo = ALGO
    password_iterations = 1000
    password_hash = ""
    password_salt = ""

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        record = PasswordHasher.hash(kwargs.pop("password", DEFAULT_PASSWORD), iterations=kwargs.get("password_iterations"))
        kwargs.update(vars(record))
        return super()._create(model_class, *args, **kwargs)


class PostFactory(BaseFactory):
    class Meta:
        model = PostModel

    id = None
    author_id = None
    content = factory.Sequence(lambda n: f"Post number {n}")
    image = None
    shares_count = 0
