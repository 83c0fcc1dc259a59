# campus_connect/infrastructure/database/models/__init__.py
# registra todas as tabelas no metadata

from campus_connect.infrastructure.database.models.user_model import UserModel  # noqa: F401
from campus_connect.infrastructure.database.models.student_model import StudentModel  # noqa: F401
from campus_connect.infrastructure.database.models.connection_model import ConnectionModel  # noqa: F401
from campus_connect.infrastructure.database.models.post_model import (  # noqa: F401
    PostCommentModel,
    PostLikeModel,
    PostModel,
    PostShareModel,
)
from campus_connect.infrastructure.database.models.conversation_model import ConversationModel  # noqa: F401
from campus_connect.infrastructure.database.models.conversation_participant_model import (  # noqa: F401
    ConversationParticipantModel,
)
from campus_connect.infrastructure.database.models.message_model import MessageModel  # noqa: F401
