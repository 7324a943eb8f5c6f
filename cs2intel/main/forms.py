"""Forms for the main blueprint."""

import re

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, ValidationError

TOURNAMENT_ID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def extract_tournament_id(value):
    """Pull a tournament UUID out of a raw id or a Challengermode URL."""
    match = TOURNAMENT_ID_PATTERN.search(value or "")
    return match.group(0).lower() if match else None


class TournamentLookupForm(FlaskForm):
    """Form for opening a tournament by id or link."""

    tournament = StringField("Tournament ID or URL", validators=[DataRequired()])

    def validate_tournament(self, field):
        """Ensure the input contains a tournament id."""
        if extract_tournament_id(field.data) is None:
            raise ValidationError("Enter a tournament ID or a Challengermode link.")

    @property
    def tournament_id(self):
        return extract_tournament_id(self.tournament.data)
