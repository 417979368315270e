import re

from flask import current_app

from kiosk import db
from kiosk.errors import NotFoundError, ValidationError
from kiosk.models import Player

NAME_MAX_LENGTH = 100
EMAIL_PATTERN = re.compile(
    r"\A[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*\Z"
)


def _text(value):
    if value is None:
        return ''
    return str(value).strip()


def register_player(name, email, phone) -> Player:
    """Validate and store a registrant from the tablet form."""
    name, email, phone = _text(name), _text(email), _text(phone)
    errors = []
    fields = []
    if not name:
        errors.append("Name can't be blank")
        fields.append('name')
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(f'Name is too long (maximum is {NAME_MAX_LENGTH} characters)')
        fields.append('name')
    if not email:
        errors.append("Email can't be blank")
        errors.append('Email is invalid')
        fields.append('email')
    elif not EMAIL_PATTERN.match(email):
        errors.append('Email is invalid')
        fields.append('email')
    if not phone:
        errors.append("Phone can't be blank")
        fields.append('phone')
    if errors:
        raise ValidationError(errors, fields)

    player = Player(name=name, email=email, phone=phone)
    db.session.add(player)
    db.session.commit()
    current_app.logger.info(f"[register] player={player.id} name={player.name!r}")
    return player


def get_player(player_id) -> Player:
    player = db.session.get(Player, player_id) if player_id is not None else None
    if player is None:
        raise NotFoundError('Player not found')
    return player


def delete_player(player_id) -> None:
    """Remove a player together with every spin they own."""
    player = get_player(player_id)
    spin_count = len(player.spins)
    db.session.delete(player)
    db.session.commit()
    current_app.logger.info(f"[delete] player={player_id} spins_removed={spin_count}")
