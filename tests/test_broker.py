"""
Unit tests for the notification broker.

Tests registry, eviction and the per-subscriber delivery loop from
libs/tracker/broker.py
"""

import asyncio
import json

import pytest

from libs.tracker.broker import NotificationBroker, build_update_event
from libs.tracker.models import Item


class TestRegistry:
    def test_subscribe_and_unsubscribe(self):
        broker = NotificationBroker()
        first = broker.subscribe()
        second = broker.subscribe()
        assert first.id != second.id
        assert broker.subscriber_count() == 2

        broker.unsubscribe(first.id)
        broker.unsubscribe(first.id)
        assert broker.subscriber_count() == 1

    def test_publish_is_fifo_per_subscriber(self):
        broker = NotificationBroker(buffer_size=4)
        subscription = broker.subscribe()
        for n in range(3):
            broker.publish(f"m{n}")
        assert [subscription.queue.get_nowait() for _ in range(3)] == ["m0", "m1", "m2"]

    def test_late_subscriber_gets_no_replay(self):
        broker = NotificationBroker()
        broker.publish("before")
        subscription = broker.subscribe()
        assert subscription.queue.empty()

    def test_full_subscriber_evicted_others_unaffected(self):
        broker = NotificationBroker(buffer_size=2)
        slow = broker.subscribe()
        fast = broker.subscribe()

        for n in range(2):
            assert broker.publish(f"m{n}") == 2
            assert fast.queue.get_nowait() == f"m{n}"

        assert broker.publish("m2") == 1
        assert broker.subscriber_count() == 1
        assert slow.closed
        assert fast.queue.get_nowait() == "m2"

        # Later publishes neither block nor raise
        assert broker.publish("m3") == 1
        assert fast.queue.get_nowait() == "m3"

    def test_publish_with_no_subscribers(self):
        assert NotificationBroker().publish("nobody") == 0

    def test_update_event_carries_full_collection(self):
        items = [Item(name="Iron Ore", target=100, gathered=20), Item(name="Rope", target=3)]
        event = json.loads(build_update_event(items))
        assert event["type"] == "update"
        assert [i["name"] for i in event["items"]] == ["Iron Ore", "Rope"]
        assert event["items"][0]["claims"] == []

    def test_close_all(self):
        broker = NotificationBroker()
        subscriptions = [broker.subscribe() for _ in range(3)]
        broker.close_all()
        assert broker.subscriber_count() == 0
        assert all(s.closed for s in subscriptions)


class TestDeliveryLoop:
    @pytest.mark.asyncio
    async def test_connected_then_data_frames_in_order(self):
        broker = NotificationBroker(keepalive_interval=30)
        subscription = broker.subscribe()
        events = subscription.events()

        assert await events.__anext__() == {"comment": "connected"}
        broker.publish("a")
        broker.publish("b")
        assert await events.__anext__() == {"data": "a"}
        assert await events.__anext__() == {"data": "b"}

        await events.aclose()
        assert broker.subscriber_count() == 0

    @pytest.mark.asyncio
    async def test_keepalive_when_idle(self):
        broker = NotificationBroker(keepalive_interval=0.05)
        events = broker.subscribe().events()

        await events.__anext__()
        frame = await asyncio.wait_for(events.__anext__(), timeout=2)
        assert frame == {"comment": "keep-alive"}
        await events.aclose()

    @pytest.mark.asyncio
    async def test_keepalive_cadence_not_reset_by_publishes(self):
        broker = NotificationBroker(keepalive_interval=0.2)
        events = broker.subscribe().events()
        await events.__anext__()

        frames = []

        async def collect():
            async for frame in events:
                frames.append(frame)

        task = asyncio.create_task(collect())
        for n in range(10):
            broker.publish(f"m{n}")
            await asyncio.sleep(0.05)
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert {"comment": "keep-alive"} in frames
        assert [f["data"] for f in frames if "data" in f] == [f"m{n}" for n in range(10)]

    @pytest.mark.asyncio
    async def test_evicted_subscriber_drains_then_ends(self):
        broker = NotificationBroker(buffer_size=1, keepalive_interval=30)
        subscription = broker.subscribe()
        events = subscription.events()
        await events.__anext__()

        broker.publish("kept")
        broker.publish("dropped")
        assert subscription.closed

        assert await events.__anext__() == {"data": "kept"}
        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(events.__anext__(), timeout=2)

    @pytest.mark.asyncio
    async def test_disconnect_probe_ends_loop(self):
        broker = NotificationBroker(keepalive_interval=0.05)

        async def gone():
            return True

        events = broker.subscribe().events(is_disconnected=gone)
        await events.__anext__()
        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(events.__anext__(), timeout=2)

    @pytest.mark.asyncio
    async def test_cancellation_deregisters(self):
        broker = NotificationBroker(keepalive_interval=30)
        subscription = broker.subscribe()

        async def consume():
            async for _ in subscription.events():
                pass

        task = asyncio.create_task(consume())
        await asyncio.sleep(0.05)
        assert broker.subscriber_count() == 1

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert broker.subscriber_count() == 0
