"""Integration tests for the Spadebid game API."""
import pytest

from spadebid.server import app as app_module


def play_until_human_turn(client, state):
    """Step AI turns until the human is on turn or the round is over."""
    while state['phase'] == 'play' and state['current_player'] != 0:
        response = client.post('/api/game/ai-turn')
        assert response.status_code == 200
        state = response.get_json()['state']
    return state


def play_whole_round(client, state):
    while state['phase'] == 'play':
        state = play_until_human_turn(client, state)
        if state['phase'] != 'play':
            break
        card_id = state['legal_cards'][0]['id']
        response = client.post('/api/game/play', json={'player_id': 0, 'card_id': card_id})
        assert response.status_code == 200
        state = response.get_json()['state']
    return state


class TestHealthAndBasicEndpoints:

    def test_health_check(self, client):
        """GET /api/health returns ok."""
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'ok'

    @pytest.mark.parametrize('method,path', [
        ('get', '/api/game/state'),
        ('post', '/api/game/bid'),
        ('post', '/api/game/trump'),
        ('post', '/api/game/play'),
        ('post', '/api/game/ai-turn'),
        ('post', '/api/game/round'),
        ('post', '/api/game/abort'),
    ])
    def test_requires_game(self, client, method, path):
        response = getattr(client, method)(path, json={})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No active game'


class TestGameLifecycle:

    def test_new_game(self, new_game):
        assert new_game['success'] is True
        assert 'game_id' in new_game
        state = new_game['state']
        assert state['phase'] == 'bidding'
        assert state['players'][0]['name'] == 'Alice'
        assert [p['team'] for p in state['players']] == ['teamA', 'teamB', 'teamA', 'teamB']

    def test_state_hides_ai_hands(self, new_game, client):
        data = client.get('/api/game/state').get_json()
        assert len(data['hands']['0']['cards']) == 5
        assert data['hands']['1'] == {'count': 5}
        assert 'cards' not in data['hands']['3']

    def test_ai_hands_stay_hidden(self, new_game, client):
        for url in ('/api/game/state', '/api/game/state?player_id=2'):
            data = client.get(url).get_json()
            assert len(data['hands']['0']['cards']) == 5
            for seat in ('1', '2', '3'):
                assert data['hands'][seat] == {'count': 5}

    def test_event_log_in_state(self, new_game):
        assert any('5 cards dealt' in e for e in new_game['state']['event_log'])


class TestBidding:

    def test_invalid_bid(self, new_game, client):
        response = client.post('/api/game/bid', json={'value': 3})
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'InvalidBid'
        state = client.get('/api/game/state').get_json()
        assert state['phase'] == 'bidding'
        assert state['bids'] == []

    def test_missing_bid_value(self, new_game, client):
        response = client.post('/api/game/bid', json={})
        assert response.status_code == 400

    def test_pass_lets_ai_win(self, new_game, client):
        response = client.post('/api/game/bid', json={'value': 0})
        assert response.status_code == 200
        data = response.get_json()
        assert data['result']['no_contract'] is False
        assert data['result']['contract']['winner_id'] == 1
        state = data['state']
        assert state['phase'] == 'play'
        assert state['current_player'] == 1
        assert len(state['hands']['0']['cards']) == 13
        assert state['contract']['trump_suit'] in ('spades', 'hearts', 'diamonds', 'clubs')

    def test_bid_twice(self, new_game, client):
        client.post('/api/game/bid', json={'value': 0})
        response = client.post('/api/game/bid', json={'value': 0})
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'BidOutOfPhase'


class TestTrumpSelection:

    def test_human_chooses_trump(self, new_game, client):
        response = client.post('/api/game/bid', json={'value': 7})
        state = response.get_json()['state']
        assert state['phase'] == 'trump_selection'
        assert state['contract']['winner_id'] == 0
        assert state['contract']['trump_suit'] is None

        response = client.post('/api/game/trump', json={'suit': 'nope'})
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'IllegalMove'

        response = client.post('/api/game/trump', json={'suit': 'D'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['contract']['trump_suit'] == 'diamonds'
        assert data['state']['phase'] == 'play'
        assert data['state']['current_player'] == 0
        assert data['state']['legal_cards']

    def test_trump_in_wrong_phase(self, new_game, client):
        response = client.post('/api/game/trump', json={'suit': 'spades'})
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'InvalidPhaseTransition'


class TestPlay:

    def test_play_out_of_turn(self, new_game, client):
        state = client.post('/api/game/bid', json={'value': 0}).get_json()['state']
        card_id = state['hands']['0']['cards'][0]['id']
        response = client.post('/api/game/play', json={'player_id': 0, 'card_id': card_id})
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'IllegalMove'

    def test_play_for_ai_seat_refused(self, new_game, client):
        client.post('/api/game/bid', json={'value': 0})
        engine = app_module.current_engine
        ai_card = engine.get_legal_cards(1)[0]

        response = client.post('/api/game/play', json={'player_id': 1, 'card_id': ai_card.id})
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'IllegalMove'

        state = client.get('/api/game/state').get_json()
        assert state['current_player'] == 1
        assert state['hands']['1'] == {'count': 13}
        assert state['current_trick']['cards'] == []

    def test_play_with_float_player_id_refused(self, new_game, client):
        state = client.post('/api/game/bid', json={'value': 0}).get_json()['state']
        state = play_until_human_turn(client, state)
        card_id = state['legal_cards'][0]['id']
        response = client.post('/api/game/play', json={'player_id': 0.0, 'card_id': card_id})
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'IllegalMove'
        assert client.get('/api/game/state').get_json()['hands']['0']['count'] == 13

    def test_ai_turn_refused_on_human_turn(self, new_game, client):
        client.post('/api/game/bid', json={'value': 5})
        client.post('/api/game/trump', json={'suit': 'spades'})
        response = client.post('/api/game/ai-turn')
        assert response.status_code == 400

    def test_full_round(self, new_game, client):
        state = client.post('/api/game/bid', json={'value': 0}).get_json()['state']
        state = play_whole_round(client, state)
        assert state['phase'] == 'round_end'
        assert state['scores']['teamA'] + state['scores']['teamB'] == 13
        assert state['totals'] == state['scores']

        response = client.post('/api/game/round')
        assert response.status_code == 200
        assert response.get_json()['state']['phase'] == 'bidding'


class TestAbort:

    def test_abort_and_redeal(self, new_game, client):
        client.post('/api/game/bid', json={'value': 0})
        client.post('/api/game/ai-turn')

        response = client.post('/api/game/abort')
        state = response.get_json()['state']
        assert state['phase'] == 'lobby'
        assert state['current_trick'] is None
        assert state['hands']['0']['count'] == 0

        response = client.post('/api/game/round')
        assert response.get_json()['state']['phase'] == 'bidding'

    def test_round_while_in_progress(self, new_game, client):
        response = client.post('/api/game/round')
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'InvalidPhaseTransition'
