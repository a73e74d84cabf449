# freshcart/services/auth.py
from typing import Protocol

from fastapi import Request
from sqlalchemy.orm import Session

from freshcart.domain.schemas import UserRead
from freshcart.repos.user_repo import UserRepo

USER_HEADER = "X-User-Id"


class AuthProvider(Protocol):
    def current_user(self, request: Request) -> UserRead | None: ...


class HeaderAuthProvider:
    """
    Zastepuje zewnetrznego providera auth: ID uzytkownika przychodzi w naglowku,
    dane bierzemy z tabeli users. Nieznany ID = niezalogowany.
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def current_user(self, request: Request) -> UserRead | None:
        user_id = request.headers.get(USER_HEADER)
        if not user_id:
            return None

        user = self.repo.get_user(user_id)
        if not user:
            return None
        return UserRead.model_validate(user)
