def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert res.get_json() == {'message': 'Laser tag backend running'}


def test_create_game(client):
    res = client.post('/api/games/create')
    assert res.status_code == 201
    data = res.get_json()
    assert data['message'] == 'New game created!'
    assert len(data['game_code']) == 6


def test_state_reflects_roster(client, make_sio_client):
    code = client.post('/api/games/create').get_json()['game_code']
    player = make_sio_client()
    player.emit('join_game', {'gameID': code, 'markerId': 2})

    res = client.get(f'/api/games/{code.lower()}/state')
    assert res.status_code == 200
    game = res.get_json()
    assert game['game_code'] == code
    assert game['status'] == 'Forming'
    assert game['player_count'] == 1
    assert game['players'][0]['markerId'] == 2
    assert game['players'][0]['lives'] == 5
    assert game['winner'] is None


def test_state_unknown_game(client):
    res = client.get('/api/games/NOPE00/state')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Game not found'}


def test_list_games(client):
    first = client.post('/api/games/create').get_json()['game_code']
    second = client.post('/api/games/create').get_json()['game_code']

    res = client.get('/api/games/')
    assert res.status_code == 200
    codes = [g['game_code'] for g in res.get_json()]
    assert first in codes and second in codes
