"""Tests for the HTTP broadcast transport."""

import logging
from unittest.mock import AsyncMock, Mock

import aiohttp
import pytest

from common.protocol import AddQso, DeleteQso, Update
from replica.service import ReplicaService
from replica.store import ReplicaStore
from replica.transport import HttpBroadcastTransport


def test_local_delivery_assigns_serials():
    transport = HttpBroadcastTransport('node-a', peers=[])
    received = []
    transport.set_update_listener(received.append)

    transport.send_update(Update.for_mutation(DeleteQso('x'), 'Deleted QSO'))
    transport.send_update(Update.for_mutation(DeleteQso('y')))

    assert [u.serial for u in received] == [1, 2]
    assert {u.sender for u in received} == {transport.sender}
    assert transport.sender.startswith('node-a:')
    assert received[0].info == 'Deleted QSO'


def test_listener_errors_are_contained():
    transport = HttpBroadcastTransport('node-a', peers=[])
    transport.set_update_listener(Mock(side_effect=RuntimeError('boom')))

    transport.send_update(Update.for_mutation(DeleteQso('x')))


def test_no_file_exchange():
    assert HttpBroadcastTransport('node-a', peers=[]).send_file('a.csv', 'text') is False


@pytest.mark.asyncio
async def test_peers_pushed_in_background():
    transport = HttpBroadcastTransport('node-a', peers=['http://peer:8000'])
    transport._push_all = AsyncMock()

    transport.send_update(Update.for_mutation(DeleteQso('x')))
    await transport.drain()

    envelope = transport._push_all.await_args.args[0]
    assert envelope.serial == 1
    assert envelope.sender == transport.sender


@pytest.mark.asyncio
async def test_push_failure_is_logged_not_raised():
    transport = HttpBroadcastTransport('node-a', peers=['http://peer:8000'])
    session = Mock()
    session.post.side_effect = aiohttp.ClientConnectionError('refused')

    await transport._push(session, 'http://peer:8000', b'{}', 1)

    assert session.post.call_args.args[0] == 'http://peer:8000/updates'


def test_restarted_node_is_not_filtered_by_peer(make_qso):
    peer = ReplicaService(ReplicaStore())

    first = HttpBroadcastTransport('node-a', peers=[])
    first.set_update_listener(peer.receive)
    first.send_update(Update.for_mutation(AddQso(make_qso('first'))))

    restarted = HttpBroadcastTransport('node-a', peers=[])
    restarted.set_update_listener(peer.receive)
    restarted.send_update(Update.for_mutation(AddQso(make_qso('second', callsign='K1ABC'))))

    assert first.sender != restarted.sender
    assert sorted(peer.store.records) == ['first', 'second']


def test_no_event_loop_skips_peer_push(caplog):
    transport = HttpBroadcastTransport('node-a', peers=['http://peer:8000'])
    received = []
    transport.set_update_listener(received.append)

    with caplog.at_level(logging.WARNING, logger='replica.transport'):
        transport.send_update(Update.for_mutation(DeleteQso('x')))

    assert len(received) == 1
    assert 'not pushed' in caplog.text
