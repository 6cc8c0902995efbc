import pytest

from scribble.exceptions import RoomAlreadyExists, RoomNotFound
from scribble.game.store import AI_AGENTS, RoomStore


def test_create_seeds_agent_roster():
    store = RoomStore()
    room = store.create('r1')
    assert room.id == 'r1'
    assert room.status == 'waiting'
    assert room.current_round is None
    assert room.history == []
    # Join order preserved: agents first, in roster order
    assert list(room.players) == [a['id'] for a in AI_AGENTS]
    assert len(room.players) == 5
    assert all(p.is_agent and p.model_id for p in room.players.values())
    assert all(p.score == 0 for p in room.players.values())


def test_create_rejects_duplicate_id():
    store = RoomStore()
    store.create('r1')
    with pytest.raises(RoomAlreadyExists):
        store.create('r1')


def test_get_missing_room_returns_none():
    store = RoomStore()
    assert store.get('nope') is None
    with pytest.raises(RoomNotFound):
        store.require('nope')


def test_add_player_is_idempotent():
    store = RoomStore()
    store.create('r1')
    players = store.add_player('r1', 'sid-1', 'Alice')
    assert [p.id for p in players][-1] == 'sid-1'
    again = store.add_player('r1', 'sid-1', 'Renamed')
    assert len(again) == len(players)
    assert store.get('r1').players['sid-1'].name == 'Alice'
    assert not store.get('r1').players['sid-1'].is_agent


def test_add_player_to_missing_room():
    store = RoomStore()
    with pytest.raises(RoomNotFound):
        store.add_player('nope', 'sid-1', 'Alice')


def test_remove_player_noops_and_keeps_agents():
    store = RoomStore()
    assert store.remove_player('nope', 'sid-1') == []

    store.create('r1')
    store.add_player('r1', 'sid-1', 'Alice')
    players = store.remove_player('r1', 'sid-1')
    assert 'sid-1' not in [p.id for p in players]
    # Unknown player and agents are left alone
    store.remove_player('r1', 'ghost')
    store.remove_player('r1', 'ai-claude')
    assert 'ai-claude' in store.get('r1').players


def test_reset_zeroes_scores_and_keeps_roster():
    store = RoomStore()
    room = store.create('r1')
    store.add_player('r1', 'sid-1', 'Alice')
    room.players['sid-1'].score = 30
    room.players['ai-llama'].score = 10
    room.status = 'in-game'
    roster = list(room.players)

    store.reset('r1')
    assert room.history == []
    assert room.current_round is None
    assert room.status == 'waiting'
    assert list(room.players) == roster
    assert all(p.score == 0 for p in room.players.values())

    with pytest.raises(RoomNotFound):
        store.reset('nope')


def test_custom_roster():
    store = RoomStore(agents=[{'id': 'ai-x', 'name': 'X', 'model_id': 'x/1'}])
    room = store.create('r1')
    assert list(room.players) == ['ai-x']
