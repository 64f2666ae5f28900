"""用户相关的响应模型。"""

from pydantic import BaseModel, Field

from api_skeleton.api.v1.schemas.common import ResponseEnvelope


class User(BaseModel):
    id: int = Field(..., examples=[1])
    name: str = Field(..., examples=["Jean Dupont"])


UserListResponse = ResponseEnvelope[list[User]]
