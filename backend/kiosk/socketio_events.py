from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from kiosk.services import broadcast


def _channel() -> str:
    return current_app.config.get('REALTIME_CHANNEL', 'game_updates')


def handle_connect():
    # Every display subscribes on connect; there is no backlog, so clients
    # fetch the current state over HTTP after this
    join_room(_channel())
    current_app.logger.info(f"[subscribe] sid={request.sid} room={_channel()}")
    emit('connected', {'message': 'Connected', 'channel': _channel()})


def handle_disconnect(*args):
    current_app.logger.info(f"[unsubscribe] sid={request.sid}")


def handle_subscribe(data=None):
    join_room(_channel())
    emit('subscribed', {'channel': _channel()})


def handle_unsubscribe(data=None):
    leave_room(_channel())
    emit('unsubscribed', {'channel': _channel()})


def handle_button_pressed(data=None):
    # Sent by the GPIO daemon watching the physical button
    current_app.logger.info(f"[button] sid={request.sid}")
    broadcast.publish_spin_started()


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on the real-time namespace."""
    from kiosk import socketio

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('subscribe', handle_subscribe, namespace=namespace)
    socketio.on_event('unsubscribe', handle_unsubscribe, namespace=namespace)
    socketio.on_event('button_pressed', handle_button_pressed, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
