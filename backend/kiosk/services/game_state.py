"""The kiosk-wide session record and its phase transitions.

Callers (tablet, button daemon, TV) drive the sequence
idle -> ready -> spinning -> results -> idle. Any phase in GAME_PHASES may
be written directly; only membership in that set is enforced here.
Every accepted write is committed first and broadcast second.
"""

from datetime import datetime
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from kiosk import db
from kiosk.errors import ValidationError
from kiosk.models import GameState, GAME_PHASES, GAME_STATE_ID
from . import broadcast

PLAYER_NAME_MAX_LENGTH = 100


def current() -> GameState:
    """Fetch the session row, creating it in the idle phase on first access."""
    state = db.session.get(GameState, GAME_STATE_ID)
    if state is not None:
        return state
    try:
        db.session.add(GameState(id=GAME_STATE_ID, state='idle', updated_at=datetime.now()))
        db.session.commit()
    except IntegrityError:
        # Another request created it first
        db.session.rollback()
    return db.session.get(GameState, GAME_STATE_ID)


def _optional_int(value, field: str) -> Optional[int]:
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValidationError([f'{field.replace("_", " ").capitalize()} is not a number'], [field])
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError([f'{field.replace("_", " ").capitalize()} is not a number'], [field])


def _optional_name(value) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(['Player name must be a string'], ['player_name'])
    if len(value) > PLAYER_NAME_MAX_LENGTH:
        raise ValidationError(
            [f'Player name is too long (maximum is {PLAYER_NAME_MAX_LENGTH} characters)'], ['player_name']
        )
    return value


def update_state(new_state, player_id=None, player_name=None, spin_id=None) -> GameState:
    """Overwrite the session phase and active player/spin, then broadcast it.

    Fields left out are cleared. Entering idle always clears them.
    """
    if not new_state:
        raise ValidationError(["State can't be blank", 'State is not included in the list'], ['state'])
    if new_state not in GAME_PHASES:
        raise ValidationError(['State is not included in the list'], ['state'])
    player_id = _optional_int(player_id, 'player_id')
    spin_id = _optional_int(spin_id, 'spin_id')
    player_name = _optional_name(player_name)
    if new_state == 'idle':
        player_id, player_name, spin_id = None, None, None

    previous = current().state
    try:
        GameState.query.filter_by(id=GAME_STATE_ID).update({
            'state': new_state,
            'current_player_id': player_id,
            'current_player_name': player_name,
            'current_spin_id': spin_id,
            'updated_at': datetime.now(),
        }, synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    current_app.logger.info(
        f"[state] {previous} -> {new_state} player={player_id} name={player_name!r} spin={spin_id}"
    )
    broadcast.publish_state_changed(new_state, player_id=player_id, player_name=player_name, spin_id=spin_id)
    return current()


def reset() -> GameState:
    """Return the kiosk to idle, clearing the active player and spin."""
    return update_state('idle')
