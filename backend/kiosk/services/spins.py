import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from kiosk import db
from kiosk.errors import NotFoundError, ValidationError
from kiosk.models import Player, Spin, REEL_NAMES
from . import reels

# bonus_multiplier is NUMERIC(3,1)
MULTIPLIER_STEP = Decimal('0.1')
MULTIPLIER_LIMIT = Decimal('100')
# Upper bound of the INTEGER score and reel columns
INTEGER_MAX = 2_147_483_647


def _check_score_range(field: str, value: int) -> None:
    if value > INTEGER_MAX:
        label = field.replace('_', ' ').capitalize()
        raise ValidationError([f'{label} must be less than or equal to {INTEGER_MAX}'], [field])


def effective_multiplier(stored) -> Decimal:
    return Decimal(str(stored)) if stored is not None else Decimal('1.0')


def score_reels(values: Iterable[int], multiplier=None) -> Tuple[int, int, int]:
    """Return (banana_count, base_score, total_score) for a set of reel values.

    total_score is floor(base_score * multiplier), the multiplier defaulting
    to 1.0 when no bonus has been applied.
    """
    values = list(values)
    banana_count = values.count(reels.BANANA_VALUE)
    base_score = sum(values)
    total_score = math.floor(Decimal(base_score) * effective_multiplier(multiplier))
    return banana_count, base_score, total_score


def normalize_multiplier(raw) -> Decimal:
    """Coerce a client-supplied multiplier to the stored one-decimal form."""
    if raw is None or isinstance(raw, bool):
        raise ValidationError(["Multiplier can't be blank"], ['multiplier'])
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        raise ValidationError(['Multiplier is not a number'], ['multiplier'])
    if not value.is_finite():
        raise ValidationError(['Multiplier is not a number'], ['multiplier'])
    # Range checks precede quantize, which fails on values too wide for the context
    if value < 0:
        raise ValidationError(['Multiplier must be greater than or equal to 0'], ['multiplier'])
    if value >= MULTIPLIER_LIMIT:
        raise ValidationError([f'Multiplier must be less than {MULTIPLIER_LIMIT}'], ['multiplier'])
    value = value.quantize(MULTIPLIER_STEP, rounding=ROUND_HALF_UP)
    if value >= MULTIPLIER_LIMIT:
        raise ValidationError([f'Multiplier must be less than {MULTIPLIER_LIMIT}'], ['multiplier'])
    return value


def _label(name: str) -> str:
    return f'{name}_value'.replace('_', ' ').capitalize()


def _validate_reels(values: Dict[str, object]) -> None:
    errors = []
    fields = []
    for name in REEL_NAMES:
        value = values.get(name)
        if value is None:
            errors.append(f"{_label(name)} can't be blank")
        elif isinstance(value, bool) or not isinstance(value, int):
            errors.append(f'{_label(name)} must be an integer')
        elif value <= 0:
            errors.append(f'{_label(name)} must be greater than 0')
        elif value > INTEGER_MAX:
            errors.append(f'{_label(name)} must be less than or equal to {INTEGER_MAX}')
        else:
            continue
        fields.append(f'{name}_value')
    if errors:
        raise ValidationError(errors, fields)


def create_spin(player_id: Optional[int], reel_values: Optional[Dict[str, object]] = None) -> Spin:
    """Record a spin for a player, pulling the reels unless values are given.

    Explicit values are keyed by reel name (zillow, realtor, ...). Nothing is
    persisted when validation fails.
    """
    player = db.session.get(Player, player_id) if player_id is not None else None
    if player is None:
        raise ValidationError(['Player must exist'], ['player_id'])

    values = dict(reel_values) if reel_values is not None else reels.generate_all()
    _validate_reels(values)

    banana_count, base_score, total_score = score_reels(values[name] for name in REEL_NAMES)
    _check_score_range('base_score', base_score)
    spin = Spin(
        player_id=player.id,
        banana_count=banana_count,
        base_score=base_score,
        total_score=total_score,
        **{f'{name}_value': values[name] for name in REEL_NAMES},
    )
    try:
        db.session.add(spin)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    current_app.logger.info(
        f"[spin] id={spin.id} player={player.id} reels={spin.reel_values} "
        f"bananas={banana_count} base={base_score} total={total_score}"
    )
    return spin


def get_spin(spin_id: int) -> Spin:
    spin = db.session.get(Spin, spin_id)
    if spin is None:
        raise NotFoundError('Spin not found')
    return spin


def apply_bonus_multiplier(spin_id: int, multiplier) -> Spin:
    """Store a bonus multiplier and recompute total_score in one update.

    Repeated calls overwrite the previous multiplier.
    """
    spin = get_spin(spin_id)
    value = normalize_multiplier(multiplier)
    _, _, total_score = score_reels(spin.reel_values, value)
    _check_score_range('total_score', total_score)
    try:
        db.session.query(Spin).filter_by(id=spin.id).update(
            {'bonus_multiplier': value, 'total_score': total_score},
            synchronize_session=False,
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    current_app.logger.info(f"[bonus] spin={spin_id} multiplier={value} total={total_score}")
    return get_spin(spin_id)
