from __future__ import annotations

import random
import string
import typing

from flask import session
from flask_login import AnonymousUserMixin, UserMixin
from sqlalchemy import func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from loggingmanager import set_user_id

from . import BaseModel

if typing.TYPE_CHECKING:
    from .talk import Talk

__all__ = [
    "AnonymousUser",
    "User",
]


class User(BaseModel, UserMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(unique=True, index=True)
    name: Mapped[str] = mapped_column(index=True)

    talks: Mapped[list[Talk]] = relationship(
        back_populates="user",
        lazy="dynamic",
        order_by="Talk.id",
    )

    def __init__(self, email: str, name: str):
        self.email = email
        self.name = name

    @classmethod
    def get_by_email(cls, email) -> User | None:
        return User.query.filter(func.lower(User.email) == func.lower(email)).one_or_none()

    @classmethod
    def does_user_exist(cls, email):
        return bool(User.get_by_email(email))

    def __repr__(self):
        return f"<User {self.email}>"


class AnonymousUser(AnonymousUserMixin):
    """An anonymous user - the only persistent item here is the ID
    which is stored in the session.
    """

    def __init__(self, id):
        self.anon_id = id

    def get_id(self):
        return self.anon_id


def load_anonymous_user():
    """Factory method for anonymous users which stores a user ID in
    the session. This is assigned to `login_manager.anonymous_user`
    in main.py.
    """
    if "anon_id" in session:
        au = AnonymousUser(session["anon_id"])
    else:
        aid = "".join(random.choice(string.ascii_lowercase + string.digits) for _ in range(8))
        session["anon_id"] = aid
        au = AnonymousUser(aid)

    set_user_id(au.get_id())
    return au
