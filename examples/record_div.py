"""
Record-and-replay example.

Run this with:
    python examples/record_div.py                        # records on first run
    CALLREPLAY_UPDATE=none python examples/record_div.py # replays, no real calls

Then inspect the records with:
    callreplay list examples/__records__
    callreplay show examples/__records__ div 1
"""

import asyncio

from callreplay import Deserializers, Serializers, record_and_replay

real_calls = 0


async def div(numerator: float, denominator: float) -> float:
    global real_calls
    real_calls += 1
    if denominator == 0:
        raise Exception("Division by zero")
    return numerator / denominator


def parse_number(obj) -> float:
    if not isinstance(obj, (int, float)) or isinstance(obj, bool):
        raise ValueError(f"Expected a number in record, got {obj!r}")
    return obj


async def main() -> None:
    div_fixture = record_and_replay(
        "div",
        div,
        serialize=Serializers(),
        deserialize=Deserializers(success=parse_number),
        allow_only_one_update_per_test=True,
    )

    print(f"6 / 2 = {await div_fixture(6, 2)}")
    print(f"10 / 5 = {await div_fixture(10, 5)}")
    try:
        await div_fixture(1, 0)
    except Exception as e:
        print(f"1 / 0 raised: {e}")

    result = div_fixture.is_fulfilled()
    print(f"Fulfilled: {result.success}")
    print(f"Real calls made: {real_calls}")


if __name__ == "__main__":
    asyncio.run(main())
