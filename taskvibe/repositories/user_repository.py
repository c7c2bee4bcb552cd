# taskvibe/repositories/user_repository.py
from typing import Optional

from sqlalchemy.orm import Session

from taskvibe.models.user import User
from taskvibe.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_id(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """Get user by ID, optionally locking the row for the rest of the transaction."""
        query = self.db.query(User).filter(User.id == user_id)
        if for_update:
            query = query.with_for_update()
        return query.first()
