from __future__ import annotations

import typing
from collections.abc import Mapping
from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship, validates

from . import BaseModel, naive_utcnow

if typing.TYPE_CHECKING:
    from .user import User

__all__ = [
    "Talk",
    "TalkStore",
    "TalkOwnershipException",
    "can_edit",
]


# Choices as (stored value, label shown to the speaker)
TALK_TYPES = [
    ("regular", "Regular talk"),
    ("tutorial", "Tutorial"),
]

TALK_LEVELS = [
    ("entry", "Entry level"),
    ("mid", "Mid-level"),
    ("advanced", "Advanced"),
]

TALK_CATEGORIES = [
    ("api", "APIs (REST, SOAP, etc.)"),
    ("continuousdelivery", "Continuous Delivery"),
    ("database", "Database"),
    ("development", "Development"),
    ("devops", "Devops"),
    ("framework", "Framework"),
    ("ibmi", "IBMi"),
    ("javascript", "JavaScript"),
    ("security", "Security"),
    ("testing", "Testing"),
    ("uiux", "UI/UX"),
    ("other", "Other"),
]

TITLE_MAX_LENGTH = 100

# Everything a speaker may change after submission. The owner is not in here.
MUTABLE_FIELDS = (
    "title",
    "description",
    "type",
    "level",
    "category",
    "desired",
    "slides",
    "other",
    "sponsor",
)


class TalkOwnershipException(Exception):
    pass


class Talk(BaseModel):
    __tablename__ = "talk"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("user.id"), index=True)
    created: Mapped[datetime] = mapped_column(default=naive_utcnow)
    modified: Mapped[datetime] = mapped_column(default=naive_utcnow, onupdate=naive_utcnow)

    title: Mapped[str] = mapped_column()
    description: Mapped[str] = mapped_column()
    type: Mapped[str] = mapped_column()
    level: Mapped[str] = mapped_column()
    category: Mapped[str] = mapped_column()
    # The speaker would like travel or accommodation support
    desired: Mapped[bool] = mapped_column(default=False)
    slides: Mapped[str | None] = mapped_column()
    other: Mapped[str | None] = mapped_column()
    sponsor: Mapped[str | None] = mapped_column()

    user: Mapped[User] = relationship(back_populates="talks")

    @validates("user_id")
    def validate_user_id(self, key, user_id):
        if self.user_id is not None and user_id != self.user_id:
            raise TalkOwnershipException(
                f"Talk {self.id} belongs to user {self.user_id} and cannot be moved to {user_id}"
            )
        return user_id

    def update_from(self, fields: Mapping):
        for name in MUTABLE_FIELDS:
            if name in fields:
                setattr(self, name, fields[name])

    def is_owned_by(self, user_id) -> bool:
        return user_id is not None and self.user_id == user_id

    @property
    def human_type(self):
        return dict(TALK_TYPES).get(self.type, self.type)

    @property
    def human_level(self):
        return dict(TALK_LEVELS).get(self.level, self.level)

    @property
    def human_category(self):
        return dict(TALK_CATEGORIES).get(self.category, self.category)

    def __repr__(self):
        return f"<Talk {self.id}: {self.title!r}>"


def can_edit(talk: Talk, user_id: int | None) -> bool:
    """Only the speaker who submitted a talk may change it."""
    return talk.is_owned_by(user_id)


class TalkStore:
    """Creates, finds and updates talks through a SQLAlchemy session.

    The field maps passed in are plain mappings of column name to value.
    ``create`` needs a ``user_id``; ``update`` only ever touches
    ``MUTABLE_FIELDS`` so the owner cannot be changed through it.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, fields: Mapping) -> int:
        talk = Talk(user_id=fields["user_id"])
        talk.update_from(fields)
        self.session.add(talk)
        self.session.commit()
        return talk.id

    def find(self, talk_id) -> Talk | None:
        return self.session.get(Talk, talk_id)

    def update(self, talk_id, fields: Mapping) -> bool:
        talk = self.find(talk_id)
        if talk is None:
            return False

        talk.update_from(fields)
        self.session.commit()
        return True
