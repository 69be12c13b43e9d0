""" Creating and editing talks.

The handler is handed the current user and somewhere to put flash
messages rather than reaching for flask-login and the session itself,
so views and tests can drive it the same way.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from flask import flash
from flask_login import current_user
from werkzeug.datastructures import MultiDict

from main import db
from models.talk import Talk, TalkStore, can_edit

from .forms import TalkForm

logger = logging.getLogger(__name__)


class TalkAccessError(Exception):
    pass


class TalkNotFound(TalkAccessError):
    pass


class EditDenied(TalkAccessError):
    pass


class NotLoggedIn(TalkAccessError):
    pass


class UserProvider(Protocol):
    def current_user_id(self) -> int | None: ...


class FlashStore(Protocol):
    def set(self, kind: str, message: str) -> None: ...


class FlaskLoginUserProvider:
    def current_user_id(self):
        if not current_user.is_authenticated:
            return None
        return current_user.id


class SessionFlashStore:
    """Flash messages go into the Flask session and are shown on the next page."""

    def set(self, kind, message):
        flash(message, kind)


@dataclass
class Outcome:
    ok: bool
    form: TalkForm
    talk: Talk | None = None


class TalkSubmissionHandler:
    def __init__(self, store: TalkStore, users: UserProvider, flashes: FlashStore):
        self.store = store
        self.users = users
        self.flashes = flashes

    @classmethod
    def for_request(cls):
        return cls(TalkStore(db.session), FlaskLoginUserProvider(), SessionFlashStore())

    def bind_form(self, fields: Mapping) -> TalkForm:
        if not isinstance(fields, MultiDict):
            fields = MultiDict({k: v for k, v in fields.items() if v is not None})
        return TalkForm(formdata=fields)

    def create_talk(self, fields: Mapping) -> Outcome:
        user_id = self.users.current_user_id()
        if user_id is None:
            raise NotLoggedIn("You must be logged in to submit a talk")

        form = self.bind_form(fields)
        if not form.validate():
            logger.info("Rejected talk from user %s: %s", user_id, form.errors)
            self.flashes.set("error", "There was a problem with your talk, please check the form below.")
            return Outcome(ok=False, form=form)

        talk_id = self.store.create(dict(form.talk_fields(), user_id=user_id))
        talk = self.store.find(talk_id)
        logger.info("Talk %s created by user %s", talk_id, user_id)
        self.flashes.set("success", "Your talk has been submitted.")
        return Outcome(ok=True, form=form, talk=talk)

    def authorize_edit(self, talk_id) -> Talk:
        """Return the talk if the current user may edit it.

        Raises TalkNotFound or EditDenied otherwise.
        """
        talk = self.store.find(talk_id)
        if talk is None:
            raise TalkNotFound(f"Talk {talk_id} does not exist")

        user_id = self.users.current_user_id()
        if not can_edit(talk, user_id):
            logger.warning("User %s tried to edit talk %s owned by %s", user_id, talk.id, talk.user_id)
            raise EditDenied(f"Talk {talk_id} does not belong to user {user_id}")

        return talk

    def update_talk(self, talk_id, fields: Mapping) -> Outcome:
        talk = self.authorize_edit(talk_id)

        form = self.bind_form(fields)
        if not form.validate():
            logger.info("Rejected update to talk %s: %s", talk.id, form.errors)
            self.flashes.set("error", "There was a problem with your changes, please check the form below.")
            return Outcome(ok=False, form=form, talk=talk)

        self.store.update(talk.id, form.talk_fields())
        logger.info("Talk %s updated", talk.id)
        self.flashes.set("success", "Your talk has been updated.")
        return Outcome(ok=True, form=form, talk=talk)
