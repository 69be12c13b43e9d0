from urllib.parse import urlparse

from wtforms import SelectField, StringField, TextAreaField
from wtforms.validators import URL, DataRequired, Length, Optional, ValidationError

from models.talk import TALK_CATEGORIES, TALK_LEVELS, TALK_TYPES, TITLE_MAX_LENGTH

from ..common.forms import Form, LenientBooleanField


class TalkForm(Form):
    # The select fields have no DataRequired: SelectField already rejects
    # anything that isn't one of its choices.
    title = StringField(
        "Title",
        [DataRequired(), Length(max=TITLE_MAX_LENGTH)],
        id="form-talk-title",
    )
    description = TextAreaField("Description", [DataRequired()], id="form-talk-description")
    type = SelectField("Type", choices=TALK_TYPES, id="form-talk-type")
    level = SelectField("Level", choices=TALK_LEVELS, id="form-talk-level")
    category = SelectField("Category", choices=TALK_CATEGORIES, id="form-talk-category")
    desired = LenientBooleanField("I would need help with travel or accommodation", id="form-talk-desired")
    slides = StringField("Slides", [Optional(), URL()], id="form-talk-slides")
    other = TextAreaField("Other notes for the organisers", id="form-talk-other")
    sponsor = StringField("Sponsor", id="form-talk-sponsor")

    def validate_slides(form, field):
        # The link ends up in an href on the talk page
        if urlparse(field.data).scheme not in ("http", "https"):
            raise ValidationError("Slides must be an http or https link")

    def talk_fields(self):
        """The submitted values keyed by Talk column name. Empty optional
        fields are stored as NULL."""
        return {
            "title": self.title.data,
            "description": self.description.data,
            "type": self.type.data,
            "level": self.level.data,
            "category": self.category.data,
            "desired": bool(self.desired.data),
            "slides": self.slides.data or None,
            "other": self.other.data or None,
            "sponsor": self.sponsor.data or None,
        }
