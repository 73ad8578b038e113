from pydantic import BaseModel


class CurrentUser(BaseModel):
    id: int
    username: str
    email: str
    is_admin: bool = False
