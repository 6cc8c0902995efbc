import os
import random
import sys

import pytest

# Ensure the backend root (containing the `scribble` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scribble.ai.client import Drawing
from scribble.ai.svg import svg_data_url
from scribble.config import Config
from scribble.exceptions import AIServiceError
from scribble.game.service import GameService


class TestConfig(Config):
    __test__ = False

    TESTING = True
    SECRET_KEY = 'test-secret'
    SOCKETIO_ASYNC_MODE = 'threading'
    AUTO_CREATE_ROOMS = True
    ROUND_DURATION_SEC = 60
    TICK_INTERVAL_SEC = 1.0
    COOLDOWN_SEC = 5.0
    ELIGIBLE_GUESSERS = 'all'
    AI_GUESS_CHANCE = 0.0
    AI_CORRECT_CHANCE = 0.3
    AI_MIN_ELAPSED_SEC = 10
    SCORING_MODE = 'flat'
    GUESSER_POINTS = 10
    DRAWER_POINTS = 10
    AI_GATEWAY_TOKEN = 'test-token'
    AI_GUESS_MODEL = 'test/guesser'
    AI_RETRIES = 2
    AI_RETRY_DELAY_SEC = 0.3
    AI_MOCK_FALLBACK = False


class FakeSocketIO:
    """Stands in for the Flask-SocketIO server.

    Background tasks are queued and only run when the test asks; sleep
    returns immediately and is recorded.
    """

    def __init__(self):
        self.emitted = []
        self.tasks = []
        self.sleeps = []

    def emit(self, event, data=None, to=None, skip_sid=None, **kwargs):
        self.emitted.append({'event': event, 'data': data, 'to': to, 'skip_sid': skip_sid})

    def start_background_task(self, target, *args, **kwargs):
        self.tasks.append((target, args, kwargs))

    def sleep(self, seconds=0):
        self.sleeps.append(seconds)

    def run_next(self):
        target, args, kwargs = self.tasks.pop(0)
        target(*args, **kwargs)

    def run_all(self, limit=20):
        ran = 0
        while self.tasks and ran < limit:
            self.run_next()
            ran += 1
        return ran

    def events(self, name):
        return [e for e in self.emitted if e['event'] == name]


class StubAI:
    def __init__(self, fail_drawings=0, guess='cat', fail_guesses=0):
        self.fail_drawings = fail_drawings
        self.fail_guesses = fail_guesses
        self.guess = guess
        self.drawing_calls = []
        self.guess_calls = []
        self.on_draw = None
        self.on_guess = None

    def generate_drawing(self, model_id, word):
        self.drawing_calls.append((model_id, word))
        if self.on_draw:
            self.on_draw()
        if self.fail_drawings > 0:
            self.fail_drawings -= 1
            raise AIServiceError('gateway down')
        svg = '<svg width="400" height="400"><circle cx="200" cy="200" r="80"/></svg>'
        return Drawing(svg=svg, image=svg_data_url(svg), raw_text=svg)

    def guess_from_image(self, model_id, image):
        self.guess_calls.append((model_id, image))
        if self.on_guess:
            self.on_guess()
        if self.fail_guesses > 0:
            self.fail_guesses -= 1
            raise AIServiceError('gateway down')
        return self.guess


class ScriptedRandom(random.Random):
    """random() replays scripted values, then 0.99; choice() takes the first item."""

    def __init__(self, values=()):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0) if self.values else 0.99

    def choice(self, seq):
        return seq[0]


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def fake_sio():
    return FakeSocketIO()


@pytest.fixture()
def stub_ai():
    return StubAI()


@pytest.fixture()
def rng():
    return ScriptedRandom()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def make_service(fake_sio, stub_ai, rng, clock):
    def _make(config=TestConfig, ai=None, store=None):
        return GameService.from_config(config, fake_sio, ai=ai or stub_ai, store=store, rng=rng, clock=clock)
    return _make


@pytest.fixture()
def service(make_service):
    return make_service()


@pytest.fixture()
def flask_app(stub_ai):
    from scribble.server import create_app

    application, socketio = create_app(TestConfig, ai_client=stub_ai)
    application.config['SOCKETIO'] = socketio
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    socketio = flask_app.config['SOCKETIO']
    test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
    yield test_client
    try:
        test_client.disconnect()
    except Exception:
        pass
