"""Fan-out of session events to every connected display.

Delivery is best-effort: no acknowledgement, no backlog for late joiners,
and a failed emit never propagates to the request that triggered it.
"""

import time
from typing import Any, Dict, Optional

from flask import current_app

from kiosk import socketio

EVENT_NAME = 'game_update'


def _channel():
    cfg = current_app.config
    return cfg.get('REALTIME_CHANNEL', 'game_updates'), cfg.get('REALTIME_NAMESPACE', '/ws')


def publish(payload: Dict[str, Any]) -> bool:
    """Emit one event to the channel room. Returns False if the emit failed."""
    room, namespace = _channel()
    try:
        socketio.emit(EVENT_NAME, payload, to=room, namespace=namespace)
    except Exception as exc:
        current_app.logger.warning(f"[broadcast-fail] event={payload.get('event')} error={exc!r}")
        return False
    current_app.logger.debug(f"[broadcast] event={payload.get('event')} room={room}")
    return True


def publish_state_changed(state: str, player_id: Optional[int] = None, player_name: Optional[str] = None,
                          spin_id: Optional[int] = None) -> bool:
    return publish({
        'event': 'state_changed',
        'state': state,
        'player_id': player_id,
        'player_name': player_name,
        'spin_id': spin_id,
        'timestamp': int(time.time()),
    })


def publish_spin_started() -> bool:
    """The physical button was pressed."""
    return publish({'event': 'spin_started', 'timestamp': int(time.time())})
