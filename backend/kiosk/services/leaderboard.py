from dataclasses import dataclass, asdict
from datetime import date, datetime, time
from typing import List, Optional

from flask import current_app
from sqlalchemy import func

from kiosk import db
from kiosk.models import Player, Spin


@dataclass
class LeaderboardEntry:
    rank: int
    player_id: int
    name: str
    total_score: int
    spin_count: int
    # Highest spin id among the day's spins, i.e. the player's latest spin
    best_spin_id: int

    def to_dict(self):
        return asdict(self)


def day_bounds(day: date):
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def daily_leaderboard(day: Optional[date] = None, limit: Optional[int] = None) -> List[LeaderboardEntry]:
    """Rank players by the sum of their spin totals within one calendar day.

    Ties on the summed score go to the lower player id. Players without a
    spin that day are left out.
    """
    day = day or date.today()
    if limit is None:
        limit = int(current_app.config.get('LEADERBOARD_SIZE', 10))
    start, end = day_bounds(day)

    summed = func.sum(Spin.total_score).label('total_score')
    rows = (
        db.session.query(
            Player.id,
            Player.name,
            summed,
            func.count(Spin.id).label('spin_count'),
            func.max(Spin.id).label('best_spin_id'),
        )
        .join(Spin, Spin.player_id == Player.id)
        .filter(Spin.created_at >= start, Spin.created_at <= end)
        .group_by(Player.id, Player.name)
        .order_by(summed.desc(), Player.id.asc())
        .limit(limit)
        .all()
    )
    return [
        LeaderboardEntry(
            rank=index + 1,
            player_id=row.id,
            name=row.name,
            total_score=int(row.total_score or 0),
            spin_count=int(row.spin_count),
            best_spin_id=row.best_spin_id,
        )
        for index, row in enumerate(rows)
    ]
