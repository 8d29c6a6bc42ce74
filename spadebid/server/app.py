from flask import Flask, jsonify, request
from flask_cors import CORS
import logging
import uuid

from .config import GameConfig
from .engine import GameEngine, GameError, IllegalMove
from .models import Game, HUMAN_PLAYER_ID
from .scheduler import TurnScheduler

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['GAME_CONFIG'] = GameConfig.from_env()
CORS(app)

# Store current game in memory (single local session)
current_engine = None
current_scheduler = None


def error_response(e: Exception):
    return jsonify({'error': str(e), 'kind': type(e).__name__}), 400


def no_game_response():
    return jsonify({'error': 'No active game'}), 400


def state_response(**extra):
    body = {'success': True}
    body.update(extra)
    with current_scheduler.lock:
        body['state'] = current_engine.get_game_state()
    return jsonify(body)


def run_command(command, *args):
    """Run an engine command under the scheduler lock and re-arm AI pacing."""
    with current_scheduler.lock:
        result = command(*args)
    if current_engine.config.ai_autoplay:
        current_scheduler.schedule()
    return result


@app.route('/api/health')
def health():
    return {'status': 'ok'}


# Game API

@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Start a new game: the human at seat 0, three AI players, first round dealt."""
    global current_engine, current_scheduler

    data = request.get_json(silent=True) or {}
    player_name = data.get('name', 'You')

    if current_scheduler:
        current_scheduler.cancel()

    config = app.config['GAME_CONFIG']
    game = Game(id=str(uuid.uuid4()))
    game.seat_default_players(human_name=player_name)
    current_engine = GameEngine(game, config=config)
    current_scheduler = TurnScheduler(current_engine, delay=config.ai_delay)
    current_engine.start_round()
    logger.info("New game %s", game.id)

    return state_response(game_id=game.id)


@app.route('/api/game/state')
def game_state():
    """Get current game state."""
    if not current_engine:
        return no_game_response()

    with current_scheduler.lock:
        return jsonify(current_engine.get_game_state(viewer_id=HUMAN_PLAYER_ID))


@app.route('/api/game/round', methods=['POST'])
def start_round():
    """Deal the next round after the previous one ended or was abandoned."""
    if not current_engine:
        return no_game_response()

    try:
        run_command(current_engine.start_round)
        return state_response()
    except GameError as e:
        return error_response(e)


@app.route('/api/game/abort', methods=['POST'])
def abort_round():
    """Abandon the round in progress and go back to the lobby."""
    if not current_engine:
        return no_game_response()

    current_scheduler.cancel()
    with current_scheduler.lock:
        current_engine.abort_round()
    return state_response()


@app.route('/api/game/bid', methods=['POST'])
def place_bid():
    """Submit the human's bid."""
    if not current_engine:
        return no_game_response()

    data = request.get_json(silent=True) or {}
    value = data.get('value')

    try:
        result = run_command(current_engine.submit_human_bid, value)
        return state_response(result=result)
    except GameError as e:
        return error_response(e)


@app.route('/api/game/trump', methods=['POST'])
def choose_trump():
    """The human contract winner names trump."""
    if not current_engine:
        return no_game_response()

    data = request.get_json(silent=True) or {}
    suit = data.get('suit')

    try:
        contract = run_command(current_engine.submit_trump_choice, suit)
        return state_response(contract=contract)
    except GameError as e:
        return error_response(e)


@app.route('/api/game/play', methods=['POST'])
def play_card():
    """Play a card to the current trick."""
    if not current_engine:
        return no_game_response()

    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id', HUMAN_PLAYER_ID)
    card_id = data.get('card_id')

    # AI seats play through /api/game/ai-turn or the scheduler
    if isinstance(player_id, bool) or not isinstance(player_id, int) or player_id != HUMAN_PLAYER_ID:
        return error_response(IllegalMove(f"Player {player_id!r} is not the human seat"))

    try:
        result = run_command(current_engine.submit_play, player_id, card_id)
        return state_response(result=result)
    except GameError as e:
        return error_response(e)


@app.route('/api/game/ai-turn', methods=['POST'])
def ai_turn():
    """Play one AI card now; for clients that pace the table themselves."""
    if not current_engine:
        return no_game_response()

    try:
        result = run_command(current_engine.play_ai_turn)
        return state_response(result=result)
    except GameError as e:
        return error_response(e)
