from datetime import date

from flask import Blueprint, jsonify, request

from kiosk.errors import ValidationError
from kiosk.models import REEL_NAMES
from kiosk.services import broadcast, game_state, leaderboard, players, spins


kiosk = Blueprint('kiosk', __name__)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(['Body must be a JSON object'])
    return data


def _as_id(value):
    try:
        return int(value) if value is not None and not isinstance(value, bool) else None
    except (TypeError, ValueError):
        return None


@kiosk.route('/players', methods=['POST'])
def create_player():
    data = _json_body()
    player = players.register_player(data.get('name'), data.get('email'), data.get('phone'))
    return jsonify(player.to_dict()), 201


@kiosk.route('/players/<int:player_id>', methods=['GET'])
def show_player(player_id):
    return jsonify(players.get_player(player_id).to_dict())


@kiosk.route('/players/<int:player_id>', methods=['DELETE'])
def destroy_player(player_id):
    players.delete_player(player_id)
    return '', 204


@kiosk.route('/game_state', methods=['GET'])
def show_game_state():
    return jsonify(game_state.current().to_dict())


@kiosk.route('/game_state', methods=['POST'])
def update_game_state():
    data = _json_body()
    state = game_state.update_state(
        data.get('state'),
        player_id=data.get('player_id'),
        player_name=data.get('player_name'),
        spin_id=data.get('spin_id'),
    )
    return jsonify(state.to_dict())


@kiosk.route('/game_state/reset', methods=['POST'])
def reset_game_state():
    return jsonify(game_state.reset().to_dict())


@kiosk.route('/spins', methods=['POST'])
def create_spin():
    data = _json_body()
    # Unknown or missing player is a 404, not a validation failure
    player = players.get_player(_as_id(data.get('player_id')))
    reel_values = None
    if any(f'{name}_value' in data for name in REEL_NAMES):
        reel_values = {name: data.get(f'{name}_value') for name in REEL_NAMES}
    spin = spins.create_spin(player.id, reel_values)
    return jsonify(spin.to_dict()), 201


@kiosk.route('/spins/<int:spin_id>', methods=['GET'])
def show_spin(spin_id):
    return jsonify(spins.get_spin(spin_id).to_dict())


@kiosk.route('/spins/<int:spin_id>/apply_bonus', methods=['PATCH'])
def apply_bonus(spin_id):
    data = _json_body()
    spin = spins.apply_bonus_multiplier(spin_id, data.get('multiplier'))
    return jsonify(spin.to_dict())


@kiosk.route('/leaderboard', methods=['GET'])
def show_leaderboard():
    raw_date = request.args.get('date')
    if raw_date:
        try:
            day = date.fromisoformat(raw_date)
        except ValueError:
            raise ValidationError(['Date is invalid'], ['date'])
    else:
        day = date.today()
    entries = leaderboard.daily_leaderboard(day)
    return jsonify({
        'date': day.isoformat(),
        'players': [entry.to_dict() for entry in entries],
    })


@kiosk.route('/button_pressed', methods=['POST'])
def button_pressed():
    broadcast.publish_spin_started()
    return jsonify({'event': 'spin_started'}), 202
