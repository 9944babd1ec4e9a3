from pydantic import BaseModel

from taskshare.models.user import UserModel


class UserDTO(BaseModel):
    id: int
    email: str
    name: str
    picture: str | None = None

    @classmethod
    def from_model(cls, user: UserModel) -> "UserDTO":
        return cls(id=user.id, email=user.email, name=user.name, picture=user.picture)
