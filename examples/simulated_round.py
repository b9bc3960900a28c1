"""Simulated match showing dropped-weapon cleanup.

Demonstrates:
- Wiring DropCleanup to an in-memory host
- Capacity eviction when players drop more weapons than allowed
- Age eviction by the background sweep
- Round restart forgetting tracked weapons
"""

import argparse
import asyncio
import logging
import random

from dropreaper import CleanupSettings, DropCleanup, InMemoryHistoryStore, LocalHost

WEAPONS = ["weapon_ak47", "weapon_m4a1", "weapon_awp", "weapon_deagle", "weapon_c4"]


async def play_round(cleanup: DropCleanup, host: LocalHost, drops: int) -> None:
    """Drop weapons at random; some are picked up again."""
    held = []
    for _ in range(drops):
        kind = random.choice(WEAPONS)
        weapon = host.spawn(kind)
        cleanup.on_object_created(weapon, kind=kind)
        held.append(weapon)

        if random.random() < 0.3:
            picked = held.pop(random.randrange(len(held)))
            if cleanup.on_object_consumed(picked):
                print(f"  Picked up {picked}")

        await asyncio.sleep(0.05)
        print(f"  Tracked {len(cleanup.registry)}, objects in world {len(host)}")


async def main_async(args: argparse.Namespace) -> None:
    host = LocalHost()
    history = InMemoryHistoryStore(max_records=500)
    settings = CleanupSettings(
        capacity=args.capacity, lifetime=args.lifetime, sweep_interval=args.interval
    )
    cleanup = DropCleanup.from_settings(host, settings, history=history)

    cleanup.start()
    for round_no in range(args.rounds):
        print(f"\n--- Round {round_no + 1} ---")
        await play_round(cleanup, host, args.drops)
        cleanup.on_round_boundary()
        host.clear()
    await cleanup.stop()

    stats = cleanup.registry.stats
    print(
        f"\nSweeps: {history.sweep_count}, inserted: {stats.inserted}, "
        f"evicted: {stats.evicted}, removed: {stats.removed}"
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="simulated-round",
        description="Dropped weapon cleanup - dropreaper example",
    )
    parser.add_argument("--rounds", type=int, default=2, help="Rounds to play")
    parser.add_argument("--drops", type=int, default=20, help="Drops per round")
    parser.add_argument("--capacity", type=int, default=5, help="Max tracked weapons")
    parser.add_argument("--lifetime", type=float, default=0.4, help="Weapon lifetime (s)")
    parser.add_argument("--interval", type=float, default=0.1, help="Sweep interval (s)")
    parser.add_argument("--verbose", action="store_true", help="Log evictions")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    asyncio.run(main_async(args))


if __name__ == "__main__":
    main()
