def test_health(client):
    res = client.get('/api/health')
    assert res.status_code == 200
    assert res.get_json()['status'] == 'ok'


def test_create_room(client):
    res = client.post('/api/rooms', json={'roomId': 'r1'})
    assert res.status_code == 201
    data = res.get_json()
    assert data['room'] == {'id': 'r1', 'status': 'waiting'}

    # Duplicate ids are rejected
    res = client.post('/api/rooms', json={'roomId': 'r1'})
    assert res.status_code == 409
    assert res.get_json()['error'] == 'room_exists'

    res = client.post('/api/rooms', json={})
    assert res.status_code == 400


def test_room_state_and_scoreboard(client):
    client.post('/api/rooms', json={'roomId': 'r1'})
    state = client.get('/api/rooms/r1').get_json()
    assert state['status'] == 'waiting'
    assert state['currentRound'] is None
    assert [p['isAgent'] for p in state['players']] == [True] * 5

    board = client.get('/api/rooms/r1/scoreboard').get_json()['scoreboard']
    assert len(board) == 5

    assert client.get('/api/rooms/nope').status_code == 404
    assert client.get('/api/rooms/nope/scoreboard').status_code == 404


def test_reset_room(client):
    client.post('/api/rooms', json={'roomId': 'r1'})
    res = client.post('/api/rooms/r1/reset')
    assert res.status_code == 200
    assert res.get_json()['history'] == []
    assert client.post('/api/rooms/nope/reset').status_code == 404


def test_socket_join_creates_room_and_broadcasts(flask_app, sio_client):
    ack = sio_client.emit('room:join', {'roomId': 'party', 'name': 'Alice'}, callback=True)
    assert ack['ok'] is True
    assert ack['players'] == 6

    received = sio_client.get_received()
    names = [pkt['name'] for pkt in received]
    assert 'room:players' in names
    assert 'room:scoreboard' in names
    assert 'room:joined' in names

    service = flask_app.extensions['scribble']
    humans = [p for p in service.get_room('party').players.values() if not p.is_agent]
    assert [p.name for p in humans] == ['Alice']


def test_socket_join_rejects_bad_name(sio_client):
    ack = sio_client.emit('room:join', {'roomId': 'party', 'name': '<b>x</b>'}, callback=True)
    assert ack == {'ok': False, 'error': 'invalid_payload'}
    received = sio_client.get_received()
    assert any(pkt['name'] == 'room:error' for pkt in received)


def test_socket_guess_without_round(sio_client):
    sio_client.emit('room:join', {'roomId': 'party', 'name': 'Alice'})
    sio_client.get_received()

    ack = sio_client.emit('guess:submit', {'roomId': 'party', 'text': 'cat'}, callback=True)
    assert ack == {'ok': False, 'error': 'round_not_found'}
    errors = [pkt for pkt in sio_client.get_received() if pkt['name'] == 'round:error']
    assert errors[0]['args'][0]['error'] == 'round_not_found'


def test_socket_ai_guess_without_drawing(sio_client):
    sio_client.emit('room:join', {'roomId': 'party', 'name': 'Alice'})
    ack = sio_client.emit('ai:guess', {'roomId': 'party'}, callback=True)
    assert ack['ok'] is False
    assert ack['error'] == 'round_not_found'


def test_socket_reset_missing_room(sio_client):
    ack = sio_client.emit('game:reset', {'roomId': 'nope'}, callback=True)
    assert ack == {'ok': False, 'error': 'room_not_found'}


def test_socket_leave_and_disconnect_remove_player(flask_app, sio_client):
    service = flask_app.extensions['scribble']
    sio_client.emit('room:join', {'roomId': 'party', 'name': 'Alice'})
    assert len(service.get_room('party').players) == 6

    sio_client.emit('room:leave', {'roomId': 'party'})
    assert len(service.get_room('party').players) == 5

    sio_client.emit('room:join', {'roomId': 'party', 'name': 'Alice'})
    sio_client.disconnect()
    assert len(service.get_room('party').players) == 5
