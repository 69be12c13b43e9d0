import re

from flask import current_app as app
from wtforms import EmailField, HiddenField
from wtforms.validators import DataRequired, ValidationError

from models.user import User

from ..common.forms import Form


class NextURLField(HiddenField):
    def _value(self):
        # Cheap way of ensuring we don't get absolute URLs
        if not self.data or "//" in self.data:
            return ""
        if not re.match("^[-_0-9a-zA-Z/?=&]+$", self.data):
            app.logger.error("Dropping next URL %s", repr(self.data))
            return ""
        return self.data


class LoginForm(Form):
    email = EmailField("Email", [DataRequired()])
    next = NextURLField("Next")

    def validate_email(form, field):
        if User.get_by_email(field.data) is None:
            raise ValidationError("Email address not found")
