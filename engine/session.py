"""Combat session: initiative, alternating turns, action resolution, termination.

One player against one opponent. All mutable state (HP pools, guard,
second wind, round counter) lives on the session object and is discarded
once ``run`` returns its outcome.

Draw order from the randomness source is fixed so that forced rolls line
up: initiative (player, then opponent); player attack d20, then a float for
the secondary crit only on a non-critical hit with a positive chance, then
the damage die; opponent d20, damage die, then a float for a shield block
only if a shield is equipped; second wind dice; flee d20.
"""

from __future__ import annotations

import logging
import random

import config
from engine.dice import RandomSource, roll, roll_d20, roll_die
from engine.equipment import OpponentProfile, PlayerProfile
from engine.sources import ActionSource
from models.actions import CombatAction, TurnPrompt
from models.combat import CombatEvent, CombatOutcome, CombatPhase, CombatStatus
from models.items import WeaponCategory
from models.stats import Attribute

logger = logging.getLogger(__name__)

PLAYER = "player"
OPPONENT = "opponent"
SYSTEM = "system"


class CombatSession:
    """Round-based duel between a player profile and an opponent profile."""

    def __init__(
        self,
        player: PlayerProfile,
        opponent: OpponentProfile,
        source: ActionSource,
        *,
        starting_hp: int,
        loot: list[str] | None = None,
        rng: RandomSource | None = None,
        round_cap: int | None = None,
        round_cap_policy: str | None = None,
    ) -> None:
        self.player = player
        self.opponent = opponent
        self.source = source
        self.rng = rng or random.Random()
        self.loot = list(loot or [])
        self.round_cap = round_cap if round_cap is not None else config.ROUND_CAP
        self.round_cap_policy = round_cap_policy or config.ROUND_CAP_POLICY
        if self.round_cap_policy not in ("defeat", "draw"):
            raise ValueError(f"Unknown round cap policy: {self.round_cap_policy!r}")

        self.phase = CombatPhase.INITIATIVE
        self.round_number = 1
        self.player_hp = min(max(starting_hp, 1), player.max_hp)
        self.opponent_hp = opponent.hp
        self.guard_up = False
        self.second_wind_used = False
        self.fled = False
        self.round_cap_reached = False
        self.player_first = True
        self.events: list[CombatEvent] = []

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def current_armor_class(self) -> int:
        return self.player.armor_class + (config.GUARD_AC_BONUS if self.guard_up else 0)

    @property
    def can_second_wind(self) -> bool:
        return not self.second_wind_used and self.player_hp <= self.player.max_hp // 2

    @property
    def is_finished(self) -> bool:
        return self.fled or self.player_hp <= 0 or self.opponent_hp <= 0

    def _emit(self, actor: str, kind: str, description: str, **details) -> None:
        self.events.append(
            CombatEvent(
                round=self.round_number,
                actor=actor,
                kind=kind,
                description=description,
                details=details,
            )
        )
        logger.debug("[round %d] %s", self.round_number, description)
        self.source.show(description)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> CombatOutcome:
        """Play the duel to a terminal state and return the outcome."""
        logger.info(
            "Combat begins: player %d/%d HP vs %s (Lv %d, %d HP)",
            self.player_hp, self.player.max_hp, self.opponent.name,
            self.opponent.level, self.opponent_hp,
        )
        self._announce()
        self._roll_initiative()

        order = (
            [CombatPhase.PLAYER_TURN, CombatPhase.OPPONENT_TURN]
            if self.player_first
            else [CombatPhase.OPPONENT_TURN, CombatPhase.PLAYER_TURN]
        )

        while not self.is_finished:
            if self.round_number > self.round_cap:
                self.round_cap_reached = True
                break
            for phase in order:
                self.phase = phase
                if phase is CombatPhase.PLAYER_TURN:
                    self._player_turn()
                else:
                    self._opponent_turn()
                if self.is_finished:
                    break
            else:
                self.round_number += 1

        return self._conclude()

    def _announce(self) -> None:
        p = self.player
        shield = f", block {int(p.block_chance * 100)}%" if p.has_shield else ""
        self._emit(
            SYSTEM, "announce",
            f"You: AC {p.armor_class}, DR {p.damage_reduction}; Weapon: {p.weapon.label} "
            f"d{p.weapon.die}, crit {p.crit_min}+, pen {p.weapon.penetration}{shield}",
        )
        self._emit(
            SYSTEM, "announce",
            f"{self.opponent.name}: AC {self.opponent.armor_class}, DR {self.opponent.damage_reduction}.",
        )

    def _roll_initiative(self) -> None:
        player_roll = roll_d20(self.rng)
        opponent_roll = roll_d20(self.rng)
        player_total = player_roll + self.player.attributes.modifier(Attribute.DEXTERITY)
        opponent_total = opponent_roll + self.opponent.attributes.modifier(Attribute.DEXTERITY)
        self.player_first = player_total >= opponent_total

        first = "You act" if self.player_first else f"{self.opponent.name} acts"
        self._emit(
            SYSTEM, "initiative",
            f"Initiative: you {player_total}, {self.opponent.name} {opponent_total}. {first} first.",
            player_total=player_total,
            opponent_total=opponent_total,
        )

    def _conclude(self) -> CombatOutcome:
        self.phase = CombatPhase.CONCLUDED

        if self.fled:
            status = CombatStatus.FLED
        elif self.opponent_hp <= 0 and self.player_hp > 0:
            status = CombatStatus.VICTORY
        elif self.round_cap_reached and self.round_cap_policy == "draw":
            status = CombatStatus.DRAW
        else:
            status = CombatStatus.DEFEAT

        if self.round_cap_reached:
            logger.warning(
                "Combat against %s hit the round cap (%d); concluded as %s",
                self.opponent.name, self.round_cap, status.value,
            )
            self._emit(SYSTEM, "round_cap", "The fight drags on with no end in sight.")

        won = status is CombatStatus.VICTORY
        rounds = self.round_cap if self.round_cap_reached else self.round_number
        logger.info("Combat against %s ended: %s after %d rounds", self.opponent.name, status.value, rounds)

        return CombatOutcome(
            status=status,
            player_won=won,
            player_hp=max(self.player_hp, 0),
            opponent_hp=max(self.opponent_hp, 0),
            loot=list(self.loot) if won else [],
            rounds=rounds,
            round_cap_reached=self.round_cap_reached,
            events=list(self.events),
        )

    # ------------------------------------------------------------------
    # Player turn
    # ------------------------------------------------------------------

    def _player_turn(self) -> None:
        prompt = TurnPrompt(
            round_number=self.round_number,
            player_hp=self.player_hp,
            player_max_hp=self.player.max_hp,
            opponent_hp=max(self.opponent_hp, 0),
            opponent_name=self.opponent.name,
            armor_class=self.current_armor_class,
            can_second_wind=self.can_second_wind,
        )
        choice = self.source.choose_action(prompt)
        try:
            action = CombatAction(choice)
        except ValueError:
            self._emit(PLAYER, "invalid", f"You hesitate ({choice!r} is not an action).")
            return

        match action:
            case CombatAction.ATTACK:
                self._player_attack()
            case CombatAction.GUARD:
                self.guard_up = True
                self._emit(
                    PLAYER, "guard",
                    f"You raise your guard (+{config.GUARD_AC_BONUS} AC, "
                    f"-{config.GUARD_DAMAGE_CUT} dmg until the next attack).",
                )
            case CombatAction.SECOND_WIND:
                self._second_wind()
            case CombatAction.USE_ITEM:
                self._use_item()
            case CombatAction.FLEE:
                self._flee()

    def _player_attack(self) -> None:
        p = self.player
        natural = roll_d20(self.rng)
        in_crit_range = natural >= p.crit_min
        self._emit(
            PLAYER, "attack_roll",
            f"You attack (d20={natural}{' crit-range' if in_crit_range else ''})...",
            roll=natural,
        )

        if natural == 1:
            self._emit(PLAYER, "miss", "You miss badly!", roll=natural)
            return

        total = natural + p.attack_bonus
        target_ac = self.opponent.armor_class
        crit = in_crit_range
        hit = crit or total >= target_ac
        effective_dr = max(0, self.opponent.damage_reduction - p.weapon.penetration)

        if not hit:
            if p.weapon.category is WeaponCategory.RANGED and target_ac - total <= config.GRAZE_MARGIN:
                graze = max(1, (roll_die(p.weapon.die, self.rng) + p.damage_modifier) // 2)
                graze = max(1, graze - effective_dr)
                self.opponent_hp -= graze
                self._emit(
                    PLAYER, "graze",
                    f"Graze! You deal {graze}. Foe HP: {max(0, self.opponent_hp)}.",
                    roll=natural, total=total, damage=graze,
                )
            else:
                self._emit(
                    PLAYER, "miss", f"Miss (total {total} vs AC {target_ac}).",
                    roll=natural, total=total,
                )
            return

        if not crit and p.extra_crit_chance > 0 and self.rng.random() < p.extra_crit_chance:
            crit = True

        damage = max(1, roll_die(p.weapon.die, self.rng) + p.damage_modifier)
        if crit:
            damage *= 2
            self._emit(PLAYER, "critical", "Critical hit!", roll=natural)
        damage = max(1, damage - effective_dr)
        self.opponent_hp -= damage

        self._emit(
            PLAYER, "hit", f"You deal {damage}. Foe HP: {max(0, self.opponent_hp)}.",
            roll=natural, total=total, damage=damage, critical=crit,
        )

    def _second_wind(self) -> None:
        if not self.can_second_wind:
            self._emit(PLAYER, "invalid", "Second Wind not available.")
            return

        vit_mod = self.player.attributes.modifier(Attribute.VITALITY)
        heal = max(1, roll(config.SECOND_WIND_DICE, self.rng).total + vit_mod)
        before = self.player_hp
        self.player_hp = min(self.player_hp + heal, self.player.max_hp)
        self.second_wind_used = True
        self._emit(
            PLAYER, "second_wind",
            f"Second Wind restores {self.player_hp - before} HP (now {self.player_hp}/{self.player.max_hp}).",
            healed=self.player_hp - before,
        )

    def _use_item(self) -> None:
        used = self.source.try_use_healing_item()
        if used is None:
            self._emit(PLAYER, "invalid", "No usable healing items.")
            return

        before = self.player_hp
        self.player_hp = min(self.player_hp + max(0, used.amount), self.player.max_hp)
        self._emit(
            PLAYER, "use_item",
            f"You use {used.label} and recover {self.player_hp - before} HP.",
            item=used.label, healed=self.player_hp - before,
        )

    def _flee(self) -> None:
        natural = roll_d20(self.rng)
        total = natural + self.player.attributes.modifier(Attribute.DEXTERITY)
        threshold = config.FLEE_BASE_THRESHOLD + self.opponent.level

        if total >= threshold:
            self.fled = True
            self._emit(PLAYER, "flee", "You successfully flee!", roll=natural, total=total, threshold=threshold)
        else:
            self._emit(PLAYER, "flee_failed", "You fail to escape!", roll=natural, total=total, threshold=threshold)

    # ------------------------------------------------------------------
    # Opponent turn
    # ------------------------------------------------------------------

    def _opponent_turn(self) -> None:
        name = self.opponent.name
        target_ac = self.current_armor_class
        natural = roll_d20(self.rng)

        if natural == 1:
            self._emit(OPPONENT, "miss", f"{name} swings wide and misses.", roll=natural)
        else:
            total = natural + self.opponent.attack_bonus
            crit = natural == 20
            if not (crit or total >= target_ac):
                self._emit(
                    OPPONENT, "miss", f"{name} misses (total {total} vs AC {target_ac}).",
                    roll=natural, total=total,
                )
            else:
                self._opponent_hit(natural, total, crit)

        self.guard_up = False

    def _opponent_hit(self, natural: int, total: int, crit: bool) -> None:
        name = self.opponent.name
        damage = max(1, roll_die(config.OPPONENT_DAMAGE_DIE, self.rng) + self.opponent.damage_modifier)
        if crit:
            damage *= 2
            self._emit(OPPONENT, "critical", f"{name} crits!", roll=natural)

        if self.player.has_shield and self.rng.random() < self.player.block_chance:
            before = damage
            damage = max(1, (damage + 1) // 2)
            self._emit(OPPONENT, "block", f"You block with your shield! {before} -> {damage}.")

        if self.guard_up:
            damage = max(1, damage - config.GUARD_DAMAGE_CUT)

        damage = max(1, damage - self.player.damage_reduction)
        self.player_hp -= damage
        self._emit(
            OPPONENT, "hit",
            f"{name} hits for {damage}. Your HP: {max(0, self.player_hp)}/{self.player.max_hp}.",
            roll=natural, total=total, damage=damage, critical=crit,
        )
