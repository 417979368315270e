from datetime import date, datetime, timedelta

from kiosk.models import Player, Spin


def _register(client, name='Jane Smith', email='jane@example.com', phone='423-555-1234'):
    return client.post('/api/players', json={'name': name, 'email': email, 'phone': phone})


def test_create_player(client):
    res = _register(client)
    assert res.status_code == 201
    data = res.get_json()
    assert data['id']
    assert data['name'] == 'Jane Smith'
    assert data['email'] == 'jane@example.com'
    assert data['phone'] == '423-555-1234'
    assert Player.query.count() == 1


def test_create_player_validation_errors(client):
    res = _register(client, name='', email='invalid-email', phone='')
    assert res.status_code == 422
    errors = res.get_json()['errors']
    assert "Name can't be blank" in errors
    assert 'Email is invalid' in errors
    assert "Phone can't be blank" in errors
    assert Player.query.count() == 0


def test_create_player_name_too_long(client):
    res = _register(client, name='x' * 101)
    assert res.status_code == 422
    assert res.get_json()['errors'] == ['Name is too long (maximum is 100 characters)']


def test_show_and_delete_player_cascades_spins(client):
    player = _register(client).get_json()
    client.post('/api/spins', json={'player_id': player['id']})
    client.post('/api/spins', json={'player_id': player['id']})
    assert client.get(f"/api/players/{player['id']}").get_json()['name'] == 'Jane Smith'

    res = client.delete(f"/api/players/{player['id']}")
    assert res.status_code == 204
    assert Spin.query.count() == 0
    assert client.get(f"/api/players/{player['id']}").status_code == 404


def test_game_state_defaults_to_idle(client):
    res = client.get('/api/game_state')
    assert res.status_code == 200
    data = res.get_json()
    assert data['state'] == 'idle'
    assert data['current_player_id'] is None
    assert data['current_player_name'] is None
    assert data['current_spin_id'] is None
    assert data['updated_at']


def test_game_state_round_trip(client):
    res = client.post('/api/game_state', json={'state': 'ready', 'player_id': 42})
    assert res.status_code == 200
    assert res.get_json()['current_player_id'] == 42
    data = client.get('/api/game_state').get_json()
    assert data['state'] == 'ready'
    assert data['current_player_id'] == 42


def test_game_state_rejects_unknown_phase(client):
    client.post('/api/game_state', json={'state': 'spinning', 'player_id': 99, 'player_name': 'Alice'})
    res = client.post('/api/game_state', json={'state': 'invalid_state'})
    assert res.status_code == 422
    assert res.get_json()['errors']
    data = client.get('/api/game_state').get_json()
    assert data['state'] == 'spinning'
    assert data['current_player_id'] == 99
    assert data['current_player_name'] == 'Alice'


def test_game_state_reset(client):
    client.post('/api/game_state', json={'state': 'results', 'player_id': 3, 'spin_id': 8})
    res = client.post('/api/game_state/reset')
    assert res.status_code == 200
    data = res.get_json()
    assert data['state'] == 'idle'
    assert data['current_player_id'] is None
    assert data['current_spin_id'] is None


def test_bare_paths_serve_the_same_routes(client):
    assert client.post('/game_state', json={'state': 'ready', 'player_id': 42}).status_code == 200
    assert client.get('/api/game_state').get_json()['current_player_id'] == 42
    assert client.get('/leaderboard').status_code == 200


def test_create_spin(client):
    player = _register(client).get_json()
    res = client.post('/api/spins', json={'player_id': player['id']})
    assert res.status_code == 201
    spin = res.get_json()
    assert spin['id']
    assert spin['player_id'] == player['id']
    reels = [spin[f'{n}_value'] for n in ('zillow', 'realtor', 'homes', 'google', 'smart_sign')]
    assert all(v > 0 for v in reels)
    assert spin['base_score'] == sum(reels)
    assert spin['banana_count'] == reels.count(3_000_000)
    assert spin['total_score'] == spin['base_score']
    assert spin['bonus_multiplier'] is None
    assert spin['bonus_triggered'] == (spin['banana_count'] >= 3)
    assert spin['created_at']
    assert Spin.query.count() == 1


def test_create_spin_with_explicit_reels(client):
    player = _register(client).get_json()
    res = client.post('/api/spins', json={
        'player_id': player['id'],
        'zillow_value': 1_000_000, 'realtor_value': 2_000_000, 'homes_value': 3_000_000,
        'google_value': 3_000_000, 'smart_sign_value': 3_000_000,
    })
    assert res.status_code == 201
    spin = res.get_json()
    assert spin['banana_count'] == 3
    assert spin['bonus_triggered'] is True
    assert spin['base_score'] == 12_000_000


def test_create_spin_partial_reels_rejected(client):
    player = _register(client).get_json()
    res = client.post('/api/spins', json={'player_id': player['id'], 'zillow_value': 0})
    assert res.status_code == 422
    errors = res.get_json()['errors']
    assert 'Zillow value must be greater than 0' in errors
    assert "Realtor value can't be blank" in errors
    assert Spin.query.count() == 0


def test_create_spin_unknown_player(client):
    res = client.post('/api/spins', json={'player_id': 999})
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Player not found'}
    assert client.post('/api/spins', json={}).status_code == 404


def test_show_spin(client):
    player = _register(client).get_json()
    created = client.post('/api/spins', json={'player_id': player['id']}).get_json()
    first = client.get(f"/api/spins/{created['id']}")
    second = client.get(f"/api/spins/{created['id']}")
    assert first.status_code == 200
    assert first.get_json() == second.get_json() == created


def test_show_spin_missing(client):
    res = client.get('/api/spins/12345')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Spin not found'}


def test_apply_bonus(client):
    player = _register(client).get_json()
    spin = client.post('/api/spins', json={
        'player_id': player['id'],
        'zillow_value': 1_000_000, 'realtor_value': 1_000_000, 'homes_value': 1_000_000,
        'google_value': 1_000_000, 'smart_sign_value': 1_000_000,
    }).get_json()

    res = client.patch(f"/api/spins/{spin['id']}/apply_bonus", json={'multiplier': 2.0})
    assert res.status_code == 200
    data = res.get_json()
    assert data['bonus_multiplier'] == 2.0
    assert data['total_score'] == 10_000_000

    res = client.patch(f"/api/spins/{spin['id']}/apply_bonus", json={'multiplier': 0})
    assert res.get_json()['total_score'] == 0


def test_apply_bonus_errors(client):
    assert client.patch('/api/spins/777/apply_bonus', json={'multiplier': 2.0}).status_code == 404
    player = _register(client).get_json()
    spin = client.post('/api/spins', json={'player_id': player['id']}).get_json()
    res = client.patch(f"/api/spins/{spin['id']}/apply_bonus", json={'multiplier': -2})
    assert res.status_code == 422
    res = client.patch(f"/api/spins/{spin['id']}/apply_bonus", json={})
    assert res.status_code == 422


def test_leaderboard(client):
    alice = _register(client, name='Alice', email='alice@example.com').get_json()
    bob = _register(client, name='Bob', email='bob@example.com').get_json()
    for player, value in ((alice, 2_000_000), (bob, 1_000_000)):
        client.post('/api/spins', json={
            'player_id': player['id'],
            'zillow_value': value, 'realtor_value': value, 'homes_value': value,
            'google_value': value, 'smart_sign_value': value,
        })

    res = client.get('/api/leaderboard')
    assert res.status_code == 200
    data = res.get_json()
    assert data['date'] == date.today().isoformat()
    assert [(p['rank'], p['name'], p['total_score'], p['spin_count']) for p in data['players']] == [
        (1, 'Alice', 10_000_000, 1),
        (2, 'Bob', 5_000_000, 1),
    ]


def test_leaderboard_empty(client):
    data = client.get('/api/leaderboard').get_json()
    assert data['players'] == []


def test_leaderboard_for_other_date(client, make_player, make_spin):
    yesterday = date.today() - timedelta(days=1)
    make_spin(make_player('Old'), created_at=datetime.combine(yesterday, datetime.min.time()).replace(hour=12))
    res = client.get(f'/api/leaderboard?date={yesterday.isoformat()}')
    data = res.get_json()
    assert data['date'] == yesterday.isoformat()
    assert [p['name'] for p in data['players']] == ['Old']
    assert client.get('/api/leaderboard').get_json()['players'] == []
    assert client.get('/api/leaderboard?date=not-a-date').status_code == 422


def test_non_object_bodies_rejected(client):
    for method, url in (
        (client.post, '/api/players'),
        (client.post, '/api/game_state'),
        (client.post, '/api/spins'),
        (client.patch, '/api/spins/1/apply_bonus'),
    ):
        res = method(url, json=['ready'])
        assert res.status_code == 422
        assert res.get_json() == {'errors': ['Body must be a JSON object']}
    assert client.get('/api/game_state').get_json()['state'] == 'idle'


def test_out_of_range_numbers_rejected(client):
    player = _register(client).get_json()
    res = client.post('/api/spins', json={
        'player_id': player['id'],
        'zillow_value': 2 ** 63, 'realtor_value': 1_000_000, 'homes_value': 1_000_000,
        'google_value': 1_000_000, 'smart_sign_value': 1_000_000,
    })
    assert res.status_code == 422
    assert res.get_json()['errors'] == ['Zillow value must be less than or equal to 2147483647']
    assert Spin.query.count() == 0

    spin = client.post('/api/spins', json={'player_id': player['id']}).get_json()
    res = client.patch(f"/api/spins/{spin['id']}/apply_bonus", json={'multiplier': 1e30})
    assert res.status_code == 422
    assert client.get(f"/api/spins/{spin['id']}").get_json()['total_score'] == spin['total_score']


def test_two_spin_requests_make_two_spins(client):
    player = _register(client).get_json()
    first = client.post('/api/spins', json={'player_id': player['id']})
    second = client.post('/api/spins', json={'player_id': player['id']})
    assert first.status_code == second.status_code == 201
    assert first.get_json()['id'] != second.get_json()['id']
    assert Spin.query.filter_by(player_id=player['id']).count() == 2


def test_game_state_rejects_non_text_player_name(client):
    res = client.post('/api/game_state', json={'state': 'ready', 'player_name': {'first': 'Ann'}})
    assert res.status_code == 422
    assert res.get_json()['errors'] == ['Player name must be a string']
