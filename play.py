"""Console runner: fight bestiary opponents with the tutorial character.

Usage:
    python play.py opponents
    python play.py sheet
    python play.py fight --opponent ENEMY_BANDIT
    python play.py fight --opponent ENEMY_WOLF --seed 7 --auto

Environment variables:
    DUEL_ROUND_CAP         — Max rounds before a fight is called, 1-200 (default: 100)
    DUEL_ROUND_CAP_POLICY  — "defeat" or "draw" when the cap is hit (default: defeat)
    LOG_LEVEL              — Logging level (default: INFO)
"""

import argparse
import logging
import sys

import config
from engine.combat import apply_outcome, get_player_snapshot, start_combat, start_combat_interactive
from engine.content import default_bestiary, default_catalog, tutorial_character
from engine.dice import seeded_random
from engine.inventory import MemoryInventory
from engine.sources import InventoryHealer
from models.actions import CombatAction, HealingItemUse, TurnPrompt
from models.combat import CombatOutcome

KEYS = {
    "a": CombatAction.ATTACK,
    "g": CombatAction.GUARD,
    "s": CombatAction.SECOND_WIND,
    "i": CombatAction.USE_ITEM,
    "f": CombatAction.FLEE,
}


class ConsoleActionSource:
    """Reads actions from stdin and prints combat text to stdout."""

    def __init__(self, healer: InventoryHealer) -> None:
        self._healer = healer

    def choose_action(self, prompt: TurnPrompt) -> CombatAction:
        print(
            f"\nRound {prompt.round_number} | You {prompt.player_hp}/{prompt.player_max_hp} HP "
            f"(AC {prompt.armor_class}) | {prompt.opponent_name} {prompt.opponent_hp} HP"
        )
        options = "[a]ttack [g]uard [i]tem [f]lee"
        if prompt.can_second_wind:
            options += " [s]econd wind"
        if not self._healer.has_usable_item():
            options = options.replace(" [i]tem", "")
        while True:
            try:
                choice = input(f"{options} > ").strip().lower()
            except EOFError:
                return CombatAction.FLEE
            if choice[:1] in KEYS:
                return KEYS[choice[:1]]
            print("Unknown choice.")

    def show(self, message: str) -> None:
        print(f"  {message}")

    def try_use_healing_item(self) -> HealingItemUse | None:
        return self._healer.try_use_healing_item()


def _print_outcome(outcome: CombatOutcome) -> None:
    print(f"\n*** {outcome.status.value.upper()} after {outcome.rounds} rounds ***")
    print(f"Aftermath: you {outcome.player_hp} HP, foe {outcome.opponent_hp} HP")
    for drop in outcome.loot:
        print(f"Loot: {drop}")


def list_opponents() -> None:
    """Print the bestiary."""
    print(f"{'ID':<24} {'NAME':<18} {'LV':>3}")
    print("-" * 47)
    for opponent in default_bestiary().all.values():
        print(f"{opponent.id:<24} {opponent.name:<18} {opponent.level:>3}")


def show_sheet() -> None:
    """Print the tutorial character's derived combat stats."""
    snap = get_player_snapshot(tutorial_character(), default_catalog())
    print(f"HP {snap.current_hp}/{snap.max_hp}  AC {snap.armor_class}  DR {snap.damage_reduction}")
    print(
        f"STR {snap.strength}  DEX {snap.dexterity}  INT {snap.intelligence}  VIT {snap.vitality}  "
        f"CHA {snap.charisma}  PER {snap.perception}  LCK {snap.luck}"
    )
    print(
        f"Weapon: {snap.weapon_label} d{snap.weapon_die}, crit {snap.crit_min}+, "
        f"pen {snap.penetration}{'' if snap.proficient else ' (unproficient)'}"
    )
    if snap.has_shield:
        print(f"Shield: block {int(snap.shield_block_chance * 100)}%")


def fight(opponent_id: str, seed: int | None, auto: bool) -> None:
    """Run one encounter and print the result."""
    catalog = default_catalog()
    try:
        opponent = default_bestiary().get_required(opponent_id)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        sys.exit(1)

    character = tutorial_character()
    inventory = MemoryInventory(catalog, character.inventory)
    rng = seeded_random(seed) if seed is not None else None

    print(f"Encounter: {opponent.name} (Lv {opponent.level})")
    if auto:
        outcome = start_combat(character, opponent, catalog, rng)
        for event in outcome.events:
            print(f"  [Round {event.round}] {event.description}")
    else:
        healer = InventoryHealer(inventory, catalog, inventory.item_ids())
        outcome = start_combat_interactive(character, opponent, catalog, ConsoleActionSource(healer), rng)

    character = apply_outcome(character, outcome, inventory)
    _print_outcome(outcome)
    print(f"{character.name} now has {character.current_hp} HP.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play duel engine encounters in the console")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("opponents", help="List bestiary opponents")
    subparsers.add_parser("sheet", help="Show the character sheet")

    fight_parser = subparsers.add_parser("fight", help="Fight an opponent")
    fight_parser.add_argument("--opponent", required=True, help="Bestiary id, e.g. ENEMY_BANDIT")
    fight_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible fight")
    fight_parser.add_argument("--auto", action="store_true", help="Auto-resolve without prompts")

    args = parser.parse_args()

    config.validate()
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "opponents":
        list_opponents()
    elif args.command == "sheet":
        show_sheet()
    elif args.command == "fight":
        fight(args.opponent, args.seed, args.auto)


if __name__ == "__main__":
    main()
