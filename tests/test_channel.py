import hashlib
import hmac

import pytest

from exchange.errors import ExchangeError


def test_private_call_is_signed(client, transport):
    transport.reply('getInfo', {"success": 1, "return": {"funds": {}}})

    client.channel.call({'method': 'getInfo'})

    post = transport.posts[0]
    assert post['path'] == '/tapi'
    assert post['headers']['Key'] == 'test-key'
    assert post['headers']['Content-Type'] == 'application/x-www-form-urlencoded'
    expected = hmac.new(b'test-secret', post['body'].encode(), hashlib.sha512).hexdigest()
    assert post['headers']['Sign'] == expected


def test_call_raises_exchange_error(client, transport):
    transport.reply('getInfo', {"success": 0, "error": "invalid sign"})

    with pytest.raises(ExchangeError) as exc:
        client.channel.call({'method': 'getInfo'})

    assert exc.value.message == "invalid sign"
    assert exc.value.method == 'getInfo'


def test_post_leaves_error_to_caller(client, transport):
    transport.reply('ActiveOrders', {"success": 0, "error": "no orders"})

    assert client.channel.post({'method': 'ActiveOrders'}).error == "no orders"


def test_method_is_required(client):
    with pytest.raises(ValueError):
        client.channel.call({'pair': 'ltc_btc'})


def test_every_call_uses_a_new_nonce(client, transport):
    transport.reply('getInfo', {"success": 1, "return": {"funds": {}}})

    for _ in range(3):
        client.channel.call({'method': 'getInfo'})

    nonces = [int(p['params']['nonce']) for p in transport.posts]
    assert nonces == sorted(set(nonces))
    assert nonces[2] - nonces[0] == 2


def test_public_get_path(client, transport):
    tree = client.channel.public_get('info')

    assert transport.gets == ['/api/3/info']
    assert 'ltc_btc' in tree.child('pairs').keys()
