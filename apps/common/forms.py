from flask_wtf import FlaskForm
from wtforms import BooleanField


class Form(FlaskForm):
    """
    Re-override these back to their wtforms defaults
    """

    class Meta(FlaskForm.Meta):
        csrf = False
        csrf_class = None
        csrf_context = None


class LenientBooleanField(BooleanField):
    """A checkbox which also treats the values older clients post for
    "unticked" ("0", 0) as false.
    """

    false_values = (False, "false", "", "0", 0)
