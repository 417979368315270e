from datetime import datetime
from kiosk import db

# Fixed primary key of the kiosk-wide session row
GAME_STATE_ID = 1
GAME_PHASES = ('idle', 'ready', 'spinning', 'bonus_wheel', 'results')
# Brand order of the five reels, left to right on the display
REEL_NAMES = ('zillow', 'realtor', 'homes', 'google', 'smart_sign')


def _iso(value):
    return value.isoformat() if value else None


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(64), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    spins = db.relationship(
        'Spin',
        back_populates='player',
        cascade='all, delete-orphan',
        order_by='Spin.id',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }


class Spin(db.Model):
    __tablename__ = 'spin'
    __table_args__ = (
        db.Index('ix_spin_player_id_created_at', 'player_id', 'created_at'),
    )
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id', ondelete='CASCADE'), nullable=False, index=True)
    zillow_value = db.Column(db.Integer, nullable=False)
    realtor_value = db.Column(db.Integer, nullable=False)
    homes_value = db.Column(db.Integer, nullable=False)
    google_value = db.Column(db.Integer, nullable=False)
    smart_sign_value = db.Column(db.Integer, nullable=False)
    banana_count = db.Column(db.Integer, nullable=False, default=0)
    base_score = db.Column(db.Integer, nullable=False)
    bonus_multiplier = db.Column(db.Numeric(3, 1), nullable=True)
    total_score = db.Column(db.Integer, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)
    player = db.relationship('Player', back_populates='spins')

    @property
    def reel_values(self):
        return [getattr(self, f'{name}_value') for name in REEL_NAMES]

    @property
    def bonus_triggered(self):
        return (self.banana_count or 0) >= 3

    def to_dict(self):
        payload = {
            'id': self.id,
            'player_id': self.player_id,
        }
        for name in REEL_NAMES:
            payload[f'{name}_value'] = getattr(self, f'{name}_value')
        payload.update({
            'banana_count': self.banana_count,
            'base_score': self.base_score,
            'bonus_multiplier': float(self.bonus_multiplier) if self.bonus_multiplier is not None else None,
            'total_score': self.total_score,
            'bonus_triggered': self.bonus_triggered,
            'created_at': _iso(self.created_at),
        })
        return payload


class GameState(db.Model):
    __tablename__ = 'game_state'
    __table_args__ = (
        db.CheckConstraint(
            "state IN ('idle', 'ready', 'spinning', 'bonus_wheel', 'results')",
            name='ck_game_state_state',
        ),
    )
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    state = db.Column(db.String(32), nullable=False, default='idle')
    current_player_id = db.Column(db.Integer, nullable=True)
    current_player_name = db.Column(db.String(100), nullable=True)
    current_spin_id = db.Column(db.Integer, nullable=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

    def to_dict(self):
        return {
            'state': self.state,
            'current_player_id': self.current_player_id,
            'current_player_name': self.current_player_name,
            'current_spin_id': self.current_spin_id,
            'updated_at': _iso(self.updated_at),
        }
