# campus_connect/services/connection_service.py

from sqlalchemy.exc import IntegrityError

from campus_connect.core.exceptions import BadRequestError, ConflictError, UserNotFoundError
from campus_connect.infrastructure.database.models.user_model import UserModel
from campus_connect.repositories.connection_repository import ConnectionRepository
from campus_connect.repositories.user_repository import UserRepository


class ConnectionService:
    def __init__(self, *, connection_repo: ConnectionRepository, user_repo: UserRepository) -> None:
        self._connection_repo = connection_repo
        self._user_repo = user_repo

    def connect(self, *, user_id: int, target_id: int) -> None:
        if user_id == target_id:
            raise BadRequestError("Cannot connect to yourself")

        if not self._user_repo.exists(target_id):
            raise UserNotFoundError()

        if self._connection_repo.get_pair(user_id, target_id) is not None:
            raise ConflictError("Already connected")

        try:
            self._connection_repo.create_pair(user_id, target_id)
        except IntegrityError as e:
            raise ConflictError("Already connected") from e

    def count(self, *, user_id: int) -> int:
        return self._connection_repo.count_for_user(user_id)

    def list_connections(self, *, user_id: int) -> list[UserModel]:
        return self._user_repo.list_by_ids(self._connection_repo.list_connected_ids(user_id))
