from __future__ import annotations

import asyncio
import logging

from cadence import EventEmitter, Host, Task, Trace, event, race, timeout


def on_unload_or_timeout(emitter: EventEmitter, seconds: float, host: Host) -> Task[str]:
    """Whichever comes first: an "unload" event or the deadline."""
    return race(
        event("unload", emitter, host=host).map(lambda payload: f"unloaded: {payload}"),
        timeout(seconds, lambda: "deadline reached", host=host),
    )


async def main() -> None:
    loop = asyncio.get_running_loop()
    emitter = EventEmitter()
    trace = Trace()
    host = Host(trace=trace)

    done: asyncio.Future[str] = loop.create_future()
    on_unload_or_timeout(emitter, 0.5, host).run(done.set_result)

    # Fire the event before the deadline
    loop.call_later(0.1, emitter.emit, "unload", "user closed the tab")

    print(await done)
    for ev in trace.get_events():
        print(f"{ev.id:>2} {ev.action:<14} parent={ev.parent_id} {ev.info}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
