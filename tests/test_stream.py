import pytest

from cadence import ABSENT, ContractError, Stream, Task
from fakes import ManualProducer, ManualSource


def test_from_iterable_pushes_synchronously_and_restarts() -> None:
    stream = Stream.from_iterable(v for v in (1, 2, 3))

    first, second = [], []
    stream.start(first.append)
    stream.start(second.append)

    assert first == [1, 2, 3]
    assert second == [1, 2, 3]


def test_start_without_sink() -> None:
    source = ManualSource()
    running = Stream(source).map(lambda v: v + 1).start()
    source.push(1, 2)
    running.stop()
    assert source.stops == 1


def test_map_and_filter() -> None:
    seen = []
    Stream.from_iterable(range(6)).filter(lambda v: v % 2 == 0).map(lambda v: v * 10).start(seen.append)
    assert seen == [0, 20, 40]


def test_stop_is_idempotent_and_blocks_late_emissions() -> None:
    source = ManualSource(leaky=True)
    seen = []
    running = Stream(source).start(seen.append)

    source.push("a")
    running.stop()
    running.stop()
    source.push("b")

    assert seen == ["a"]
    assert source.stops == 1


def test_flat_map_interleaves_inner_streams() -> None:
    outer = ManualSource()
    inner: dict[str, ManualSource] = {}

    def spawn(key: str) -> Stream[int]:
        inner[key] = ManualSource()
        return Stream(inner[key])

    seen = []
    running = Stream(outer).flat_map(spawn).start(seen.append)

    outer.push("x", "y")
    inner["x"].push(1)
    inner["y"].push(2)
    inner["x"].push(3)
    assert seen == [1, 2, 3]

    running.stop()
    assert outer.stops == 1
    assert inner["x"].stops == 1
    assert inner["y"].stops == 1

    inner["x"].push(4)
    assert seen == [1, 2, 3]


def test_flat_map_stops_inner_that_ends_the_pipeline_while_starting() -> None:
    outer = ManualSource()
    inner = ManualSource()

    def spawn(value: str) -> Stream[str]:
        def start(sink):
            sink(value)
            return inner(sink)

        return Stream(start)

    seen = []
    Stream(outer).flat_map(spawn).take(1).start(seen.append)
    outer.push("x")

    assert seen == ["x"]
    assert outer.stops == 1
    assert inner.stops == 1
    assert inner.sinks == []


def test_flat_map_synchronous() -> None:
    seen = []
    Stream.from_iterable([1, 2]).flat_map(lambda v: Stream.from_iterable([v, v * 10])).start(seen.append)
    assert seen == [1, 10, 2, 20]


def test_take_stops_after_n_emissions() -> None:
    """A 4th tick from a producer that ignores stop() never reaches the sink."""
    source = ManualSource(leaky=True)
    seen = []
    Stream(source).take(3).start(seen.append)

    source.push(1, 2, 3)
    assert source.stops == 1
    source.push(4)

    assert seen == [1, 2, 3]


def test_take_on_synchronous_source() -> None:
    seen = []
    Stream.from_iterable(range(10)).take(3).start(seen.append)
    assert seen == [0, 1, 2]


def test_take_zero_stops_immediately() -> None:
    source = ManualSource()
    seen = []
    Stream(source).take(0).start(seen.append)

    assert source.stops == 1
    source.push(1)
    assert seen == []


def test_take_restarts_with_fresh_count() -> None:
    stream = Stream.from_iterable("abcd").take(2)
    first, second = [], []
    stream.start(first.append)
    stream.start(second.append)
    assert first == second == ["a", "b"]


def test_drop_and_skip() -> None:
    dropped, skipped = [], []
    Stream.from_iterable([1, 2, 3, 4, 5]).drop(2).start(dropped.append)
    Stream.from_iterable([1, 2, 3, 4, 5]).skip(4).start(skipped.append)

    assert dropped == [3, 4, 5]
    assert skipped == [5]


def test_shift_delays_by_window_depth() -> None:
    shifted, passthrough = [], []
    Stream.from_iterable([1, 2, 3, 4, 5]).shift(2).start(shifted.append)
    Stream.from_iterable([1, 2]).shift(0).start(passthrough.append)

    assert shifted == [1, 2, 3]
    assert passthrough == [1, 2]


def test_chunk_drops_trailing_partial_chunk() -> None:
    source = ManualSource(leaky=True)
    seen = []
    running = Stream(source).chunk(2).start(seen.append)

    source.push(1, 2, 3, 4, 5)
    running.stop()
    source.push(6)

    assert seen == [(1, 2), (3, 4)]


def test_chunk_state_is_per_start() -> None:
    source = ManualSource()
    chunked = Stream(source).chunk(2)
    first, second = [], []

    chunked.start(first.append)
    source.push("a")
    chunked.start(second.append)
    source.push("b", "c")

    assert first == [("a", "b")]
    assert second == [("b", "c")]


def test_scan_emits_running_accumulator() -> None:
    sums, history = [], []
    Stream.from_iterable([1, 2, 3]).scan(lambda v, acc: acc + v, 0).start(sums.append)
    Stream.from_iterable("ab").scan(lambda v, acc: acc + [v], []).start(history.append)

    assert sums == [1, 3, 6]
    assert history == [["a"], ["a", "b"]]


def test_zip_pairs_positionally_under_skew() -> None:
    a, b = ManualSource(), ManualSource()
    seen = []
    Stream(a).zip(Stream(b)).start(seen.append)

    a.push("a1")
    b.push("b1")
    assert seen == [("a1", "b1")]

    # Burst on one side queues up
    a.push("a2", "a3")
    assert seen == [("a1", "b1")]

    b.push("b2")
    assert seen == [("a1", "b1"), ("a2", "b2")]
    b.push("b3", "b4")
    assert seen == [("a1", "b1"), ("a2", "b2"), ("a3", "b3")]

    a.push("a4")
    assert seen[-1] == ("a4", "b4")


def test_zip_stop_stops_both_sources() -> None:
    a, b = ManualSource(), ManualSource()
    running = Stream(a).zip(Stream(b)).start()
    running.stop()
    assert (a.stops, b.stops) == (1, 1)


def test_merge_tags_origin_in_arrival_order() -> None:
    a, b = ManualSource(), ManualSource()
    seen = []
    running = Stream(a).merge(Stream(b)).start(seen.append)

    a.push(1)
    b.push("x")
    a.push(2)

    assert seen == [(1, ABSENT), (ABSENT, "x"), (2, ABSENT)]
    running.stop()
    assert (a.stops, b.stops) == (1, 1)


def test_through_applies_pipe() -> None:
    def evens(stream: Stream[int]) -> Stream[int]:
        return stream.filter(lambda v: v % 2 == 0)

    seen = []
    Stream.from_iterable(range(5)).through(evens).start(seen.append)
    assert seen == [0, 2, 4]


def test_first_produces_first_emission_and_stops() -> None:
    source = ManualSource()
    seen = []
    handle = Stream(source).first().run(seen.append)

    source.push(1, 2)

    assert seen == [1]
    assert source.stops == 1
    assert handle.cancel() is False


def test_first_on_synchronous_source() -> None:
    seen = []
    Stream.from_iterable([7, 8]).first().run(seen.append)
    assert seen == [7]


def test_first_cancel_stops_stream() -> None:
    source = ManualSource()
    seen = []
    handle = Stream(source).first().run(seen.append)

    assert handle.cancel() is True
    assert source.stops == 1
    source.push(1)
    assert seen == []


def test_from_task_emits_once_and_stop_cancels() -> None:
    producer = ManualProducer()
    seen = []
    running = Stream.from_task(Task(producer)).start(seen.append)

    producer.fire("v")
    assert seen == ["v"]

    other = Stream.from_task(Task(producer)).start(seen.append)
    other.stop()
    assert producer.cancels == 1
    running.stop()


def test_sink_errors_propagate_out_of_start() -> None:
    def sink(value: int) -> None:
        raise RuntimeError(f"bad {value}")

    with pytest.raises(RuntimeError, match="bad 1"):
        Stream.from_iterable([1]).start(sink)


@pytest.mark.parametrize(
    "build",
    [
        lambda s: s.take(-1),
        lambda s: s.drop(-1),
        lambda s: s.skip(1.5),
        lambda s: s.shift("2"),
        lambda s: s.chunk(0),
    ],
)
def test_invalid_counts_rejected_at_construction(build) -> None:
    with pytest.raises(ContractError):
        build(Stream.from_iterable([]))
