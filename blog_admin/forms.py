"""
Form Classes for the Post Admin

PostForm carries the three editable post fields with presence-only
validation. PostIntent is the submit-button discriminator, parsed once at
the request boundary before any branching happens.
"""
from enum import Enum
from typing import Dict, Mapping, Optional
from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import InputRequired


class PostIntent(str, Enum):
    """Action requested by the clicked submit button"""
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'

    @classmethod
    def from_form(cls, form_data: Mapping[str, str]) -> 'PostIntent':
        """Parse the ``intent`` field, raising ValueError if missing or unknown"""
        value = form_data.get('intent')
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Unsupported intent: {value!r}') from None


class PostForm(FlaskForm):
    """Title, slug and markdown of a post; each only has to be present"""

    title = StringField('Post Title', validators=[InputRequired(message='Title is required')])
    slug = StringField('Post Slug', validators=[InputRequired(message='Slug is required')])
    markdown = TextAreaField('Markdown', validators=[InputRequired(message='Markdown is required')])

    EDITABLE_FIELDS = ('title', 'slug', 'markdown')

    def field_errors(self) -> Dict[str, Optional[str]]:
        """First error message per editable field, None where the field is valid"""
        errors = {}
        for name in self.EDITABLE_FIELDS:
            field_errors = getattr(self, name).errors
            errors[name] = field_errors[0] if field_errors else None
        return errors

    def post_data(self) -> Dict[str, str]:
        """Submitted values handed to the service layer"""
        return {name: getattr(self, name).data for name in self.EDITABLE_FIELDS}
