# taskvibe/schemas/token.py
from pydantic import BaseModel

from taskvibe.schemas.user import User


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
