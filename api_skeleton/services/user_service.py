"""用户服务：提供静态的示例用户列表。"""

from api_skeleton.api.v1.schemas.users import User

_USERS: tuple[User, ...] = (
    User(id=1, name="John Doe"),
    User(id=2, name="Jane Smith"),
    User(id=3, name="Alice Johnson"),
    User(id=4, name="Bob Brown"),
)


class UserService:
    def list_users(self) -> list[User]:
        return list(_USERS)


user_service = UserService()
