def test_status_reports_room_count(client, store):
    res = client.get('/')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'online', 'rooms': 0}

    store.create_room('sid-host')
    store.create_room('sid-host-2')
    assert client.get('/').get_json()['rooms'] == 2


def test_list_rooms(client, store):
    room = store.create_room('sid-host')
    store.join_room(room.code, 'Alice', 'sid-alice')
    res = client.get('/api/rooms')
    assert res.status_code == 200
    data = res.get_json()
    assert data['count'] == 1
    assert data['rooms'] == [{'code': room.code, 'phase': 'lobby', 'players': 1}]


def test_room_state(client, store):
    room = store.create_room('sid-host')
    store.join_room(room.code, 'Alice', 'sid-alice')
    res = client.get(f'/api/rooms/{room.code.lower()}')
    assert res.status_code == 200
    state = res.get_json()
    assert state['code'] == room.code
    assert state['phase'] == 'lobby'
    assert [p['name'] for p in state['players']] == ['Alice']
    assert state['evidenceCount'] == 0
    # Connection ids stay server-side
    assert 'connection_id' not in state['players'][0]


def test_unknown_room_is_404(client):
    res = client.get('/api/rooms/ZZZZ')
    assert res.status_code == 404
    assert 'error' in res.get_json()


def test_cors_allows_any_origin(client):
    res = client.get('/', headers={'Origin': 'http://example.com'})
    assert res.headers.get('Access-Control-Allow-Origin') in ('*', 'http://example.com')
