from __future__ import annotations

import asyncio

from cadence import Stream, interval


def moving_average(window: int):
    def pipe(ticks: Stream[int]) -> Stream[float]:
        return ticks.chunk(window).map(lambda chunk: sum(chunk) / window)

    return pipe


async def main() -> None:
    loop = asyncio.get_running_loop()
    finished = loop.create_future()

    squares = interval(0.05).map(lambda i: i * i)
    labelled = squares.zip(interval(0.08)).map(lambda pair: f"tick {pair[1]}: {pair[0]}")

    labelled.take(5).start(print)
    averages = squares.through(moving_average(3)).take(3)
    averages.start(lambda avg: print(f"avg {avg:.1f}"))

    Stream.from_task(squares.drop(9).first()).start(finished.set_result)
    print("tenth square:", await finished)


if __name__ == "__main__":
    asyncio.run(main())
