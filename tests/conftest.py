import json

import pytest

from config import Config
from bot_logging import Logger
from exchange.wex_client import WexExchangeClient


MARKETS = {
    "server_time": 1520000000,
    "pairs": {
        "ltc_btc": {"decimal_places": 5, "min_price": 0.0001, "max_price": 10,
                    "min_amount": 0.01, "fee": 0.2, "hidden": 0},
        "btc_usd": {"decimal_places": 3, "min_price": 0.1, "max_price": 400000,
                    "min_amount": 0.001, "fee": 0.2, "hidden": 0},
        "ltc_usd": {"decimal_places": 3, "min_price": 0.0001, "max_price": 100000,
                    "min_amount": 0.001, "fee": 0.2, "hidden": 0},
        "nmc_btc": {"decimal_places": 5, "min_price": 0.0001, "max_price": 10,
                    "min_amount": 0.1, "fee": 0.2, "hidden": 0},
    },
}

TICKERS = {
    "ltc_btc": {"buy": 0.0125, "sell": 0.0124, "last": 0.01245},
    "btc_usd": {"buy": 6250.0, "sell": 6200.0, "last": 6225.0},
    "nmc_btc": {"buy": 0.0004, "sell": 0.0002, "last": 0.0003},
}


def parse_body(body):
    """Split a signed body back into an ordered dict"""
    params = {}
    for part in body.split('&'):
        key, _, value = part.partition('=')
        params[key] = value
    return params


class FakeTransport:
    """
    Scripted stand-in for APIManager

    Public GETs are answered from MARKETS/TICKERS. Private POST replies are
    queued per method; the last queued reply keeps being returned, and a
    callable reply is called with the request params.
    """

    def __init__(self, markets=None, tickers=None):
        self.markets = MARKETS if markets is None else markets
        self.tickers = TICKERS if tickers is None else tickers
        self.gets = []
        self.posts = []
        self.replies = {}

    def reply(self, method, *payloads):
        self.replies.setdefault(method, []).extend(payloads)
        return self

    def get(self, path):
        self.gets.append(path)
        if path.endswith('/info'):
            return json.dumps(self.markets)
        if '/ticker/' in path:
            return json.dumps(self.tickers)
        raise AssertionError(f"Unexpected GET {path}")

    def post(self, path, headers, body):
        params = parse_body(body)
        self.posts.append({'path': path, 'headers': headers, 'body': body, 'params': params})

        queue = self.replies.get(params['method'])
        if not queue:
            raise AssertionError(f"No reply scripted for {params['method']}")
        payload = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(payload):
            payload = payload(params)
        return json.dumps(payload)

    def calls(self, method):
        return [p['params'] for p in self.posts if p['params']['method'] == method]


class FakeClock:
    """Monotonic clock advanced only by sleep()"""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def config(monkeypatch, tmp_path):
    monkeypatch.setenv('WEX_API_KEY', 'test-key')
    monkeypatch.setenv('WEX_API_SECRET', 'test-secret')
    monkeypatch.setenv('LOG_OUTPUT', 'console')
    monkeypatch.setenv('LOG_LEVEL', 'DEBUG')
    monkeypatch.setenv('ORDER_POLL_INTERVAL', '30')
    monkeypatch.delenv('AUDIT_LOG_PATH', raising=False)
    monkeypatch.delenv('REFERENCE_CURRENCY', raising=False)
    monkeypatch.delenv('BALANCE_THRESHOLD', raising=False)
    monkeypatch.delenv('TOKEN_SUFFIX', raising=False)
    return Config(env_file=str(tmp_path / 'missing.env'))


@pytest.fixture
def logger(config):
    return Logger(config)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(config, logger, transport, clock):
    return WexExchangeClient(config, logger, transport=transport, clock=clock, sleep=clock.sleep)
