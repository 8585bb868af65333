"""Reference client that drives the duel engine via the REST API.

Fetches the bestiary, prints a default character's sheet, auto-resolves
a seeded fight against every opponent, then replays one fight with a
scripted guard-then-attack plan and prints its event log.

Usage:
    1. Start the server:  uvicorn main:app --reload
    2. Run this bot:      python bots/example_bot.py

Environment variables:
    DUEL_URL  — Server URL (default: http://127.0.0.1:8000)
"""

import os
import sys

import httpx

BASE_URL = os.environ.get("DUEL_URL", "http://127.0.0.1:8000")

SCRIPTED_PLAN = ["guard", "attack", "attack", "use_item", "attack"]


def _print_outcome(label: str, data: dict) -> None:
    outcome = data["outcome"]
    print(
        f"  {label:<20} {outcome['status']:<8} rounds={outcome['rounds']:<3} "
        f"you={outcome['player_hp']:<3} foe={outcome['opponent_hp']:<3} "
        f"loot={','.join(outcome['loot']) or '-'}"
    )


def main() -> None:
    """Run a tour of the API against a local server."""
    client = httpx.Client(base_url=BASE_URL, timeout=10.0)

    try:
        resp = client.get("/content/opponents")
    except httpx.ConnectError:
        print(f"Error: Could not connect to server at {BASE_URL}", file=sys.stderr)
        sys.exit(1)
    resp.raise_for_status()
    opponents = resp.json()
    print(f"Bestiary has {len(opponents)} opponents.")

    # 1. Character sheet for the default character
    resp = client.post("/combat/sheet", json={})
    resp.raise_for_status()
    sheet = resp.json()
    print(
        f"\nSheet: HP {sheet['current_hp']}/{sheet['max_hp']} AC {sheet['armor_class']} "
        f"DR {sheet['damage_reduction']} {sheet['weapon_label']} d{sheet['weapon_die']} "
        f"crit {sheet['crit_min']}+"
    )

    # 2. Auto-resolve a seeded fight against each opponent
    print("\n--- AUTO-RESOLVE ---\n")
    for opponent in opponents:
        resp = client.post("/combat/resolve", json={"opponent_id": opponent["id"], "seed": 42})
        resp.raise_for_status()
        _print_outcome(opponent["name"], resp.json())

    # 3. Scripted fight with the event log
    print("\n--- SCRIPTED ---\n")
    resp = client.post(
        "/combat/scripted",
        json={"opponent_id": "ENEMY_BANDIT", "seed": 7, "actions": SCRIPTED_PLAN},
    )
    resp.raise_for_status()
    data = resp.json()
    for event in data["outcome"]["events"]:
        print(f"  [Round {event['round']}] {event['description']}")
    _print_outcome("Bandit (scripted)", data)

    client.close()


if __name__ == "__main__":
    main()
