"""Tests du classifieur de trames et du routeur public."""

import queue

import pytest
from unittest.mock import Mock

from ws.public.models import FrameShape
from ws.public.parser_router import PublicMessageParser, PublicMessageRouter
from ws.public.subscriptions import SubscriptionRegistry

SUBSCRIBED_BOOK = '{"event":"subscribed","channel":"book","pair":"BTCUSD","chanId":5}'


@pytest.fixture
def book_sink():
    return queue.Queue()


@pytest.fixture
def router(book_sink, mock_logger):
    registry = SubscriptionRegistry()
    registry.register("book", "BTCUSD", 25, book_sink)
    router = PublicMessageRouter(registry, mock_logger)
    router.route(SUBSCRIBED_BOOK)
    return router


class TestClassifyData:
    @pytest.mark.parametrize("payload, shape, rows", [
        ([5, 100.0, 2, 0.5], FrameShape.UPDATE, ((100.0, 2.0, 0.5),)),
        ([5, [99.0, 3, -0.4]], FrameShape.UPDATE, ((99.0, 3.0, -0.4),)),
        ([5, "te", "1234-BTCUSD", 1443659698, 236.42, 0.49064538],
         FrameShape.COMPACT_TUPLE, ((1443659698.0, 236.42, 0.49064538),)),
        ([5, [[100.0, 2, 0.5], [99.5, 1, 1.2]]],
         FrameShape.SNAPSHOT, ((100.0, 2.0, 0.5), (99.5, 1.0, 1.2))),
        ([5, []], FrameShape.SNAPSHOT, ()),
    ])
    def test_shapes(self, payload, shape, rows):
        frame = PublicMessageParser.classify_data(payload)
        assert frame.shape is shape
        assert frame.chan_id == 5
        assert frame.rows == rows

    @pytest.mark.parametrize("payload", [
        None,
        {},
        [],
        [5],
        ["5", 1.0, 2.0],
        [True, 1.0, 2.0],
        [5, "hb"],
        [5, "te", "x", "not-a-number"],
        [5, [[1.0, "x"]]],
        [5, [1.0, [2.0]]],
    ])
    def test_unrecognized(self, payload):
        assert PublicMessageParser.classify_data(payload).shape is FrameShape.UNRECOGNIZED

    def test_flat_numeric_frame_longer_than_three_is_single_update(self):
        # Une trame plate ne doit pas aussi être lue comme tuple compact
        frame = PublicMessageParser.classify_data([5, 1.0, 2.0, 3.0, 4.0, 5.0])
        assert frame.shape is FrameShape.UPDATE
        assert frame.delivery_rows() == [[1.0, 2.0, 3.0, 4.0, 5.0]]

    def test_snapshot_delivery_starts_with_sentinel(self):
        frame = PublicMessageParser.classify_data([5, [[1.0, 1, 1], [2.0, 2, 2], [3.0, 3, 3]]])
        rows = frame.delivery_rows()
        assert rows[0] == [0.0, 0.0, 0.0]
        assert rows[1:] == [[1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [3.0, 3.0, 3.0]]
        assert len(rows) == 1 + len(frame.rows)

    def test_parse_event_rejects_non_objects(self):
        assert PublicMessageParser.parse_event("[5, 1.0]") is None
        assert PublicMessageParser.parse_event("{not json") is None
        assert PublicMessageParser.parse_event('{"channel":"book"}') is None


class TestPublicMessageRouter:
    def test_confirmation_binds_sink(self, router, book_sink):
        assert router.registry.lookup(5).sinks == [book_sink]
        assert book_sink.empty()

    def test_snapshot_delivers_sentinel_then_rows(self, router, book_sink):
        router.route("[5,[[100.0,2,0.5],[99.5,1,1.2]]]")
        assert book_sink.get_nowait() == [[0, 0, 0], [100.0, 2, 0.5], [99.5, 1, 1.2]]

    def test_update_delivers_single_row(self, router, book_sink):
        router.route("[5,[99.0,3,-0.4]]")
        assert book_sink.get_nowait() == [[99.0, 3, -0.4]]
        assert book_sink.empty()

    def test_frames_delivered_in_wire_order(self, router, book_sink):
        for price in (101.0, 102.0, 103.0):
            router.route(f"[5,{price},1,0.1]")
        assert [book_sink.get_nowait()[0][0] for _ in range(3)] == [101.0, 102.0, 103.0]

    def test_unknown_chan_id_is_dropped_and_logged(self, router, book_sink, mock_logger):
        assert router.route("[42,[99.0,3,-0.4]]") is None
        assert book_sink.empty()
        mock_logger.warning.assert_called()

    def test_malformed_frames_are_dropped(self, router, book_sink):
        for raw in ("not json", "[5,\"hb\"]", "[]", "42"):
            assert router.route(raw) is None
        assert book_sink.empty()

    def test_unparsable_control_frame_is_ignored(self, router, book_sink):
        router.route('{"event": broken')
        router.route('["event"]')
        assert book_sink.empty()

    def test_exchange_error_event_logged(self, router, mock_logger):
        router.route('{"event":"error","msg":"Unknown pair","code":10300}')
        assert "10300" in mock_logger.warning.call_args[0][0]

    def test_duplicate_subscriptions_both_receive_rows(self, mock_logger):
        registry = SubscriptionRegistry()
        first, second = queue.Queue(), queue.Queue()
        registry.register("ticker", "ETHUSD", 1, first)
        registry.register("ticker", "ETHUSD", 1, second)
        router = PublicMessageRouter(registry, mock_logger)

        router.route('{"event":"subscribed","channel":"ticker","pair":"ETHUSD","chanId":11}')
        router.route("[11,10.0,1.0,10.1,2.0]")

        assert first.get_nowait() == [[10.0, 1.0, 10.1, 2.0]]
        assert second.get_nowait() == [[10.0, 1.0, 10.1, 2.0]]

    def test_delivery_uses_blocking_put(self, mock_logger):
        registry = SubscriptionRegistry()
        sink = Mock()
        registry.register("book", "BTCUSD", 25, sink)
        router = PublicMessageRouter(registry, mock_logger)
        router.route(SUBSCRIBED_BOOK)

        router.route("[5,[99.0,3,-0.4]]")

        sink.put.assert_called_once_with([[99.0, 3.0, -0.4]])
