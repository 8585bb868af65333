"""Tests for flag seasoning, proficiency, and equipment-derived stats."""

import pytest

from engine.catalog import ItemCatalog
from engine.content import STARTER_ITEMS, default_catalog, tutorial_character
from engine.equipment import (
    build_opponent_profile,
    build_player_profile,
    crit_threshold,
    effective_attributes,
    extra_crit_chance,
    resolve_weapon,
)
from engine.traits import (
    LEGACY_BASELINE,
    CharacterClass,
    Race,
    Specialization,
    is_proficient,
    parse_traits,
    seasoned_baseline,
)
from models.characters import CharacterState, OpponentDef
from models.items import EquipmentSlot, ItemDef, ItemType, WeaponCategory
from models.stats import Attribute, Attributes, AttributeDelta


def _make_character(
    flags: set[str] | None = None,
    equipment: dict[EquipmentSlot, str] | None = None,
    hp: int = 50,
    archetype: str | None = None,
) -> CharacterState:
    """Helper to create a test character."""
    return CharacterState(
        name="Tester",
        archetype=archetype,
        flags=flags or set(),
        equipment=equipment or {},
        current_hp=hp,
    )


@pytest.fixture
def catalog() -> ItemCatalog:
    return default_catalog()


class TestTraits:
    """Tests for parse_traits() and seasoning."""

    def test_parses_known_tags_case_insensitively(self):
        traits = parse_traits(_make_character({"RACE.Elf", "class.rogue", "Spec.Thief", "quest.done"}))
        assert traits.races == {Race.ELF}
        assert traits.classes == {CharacterClass.ROGUE}
        assert traits.specializations == {Specialization.THIEF}
        assert traits.primary_class is CharacterClass.ROGUE

    def test_unknown_tags_ignored(self):
        traits = parse_traits(_make_character({"race.dwarf", "class.bard"}))
        assert not traits.races and not traits.classes
        assert traits.primary_class is None

    def test_archetype_fallback(self):
        traits = parse_traits(_make_character(archetype="Mage"))
        assert traits.primary_class is CharacterClass.MAGE

    def test_first_class_flag_is_primary(self):
        traits = parse_traits(_make_character({"class.warrior", "class.bard"}, archetype="Mage"))
        assert traits.classes == {CharacterClass.WARRIOR}
        assert traits.primary_class is None

    def test_legacy_build_ignores_extra_tags(self):
        traits = parse_traits(_make_character({"race.human", "class.warrior", "spec.champion", "race.elf"}))
        assert seasoned_baseline(traits) == LEGACY_BASELINE

    def test_legacy_build_uses_fixed_baseline(self):
        traits = parse_traits(_make_character({"race.human", "class.warrior", "spec.champion"}))
        assert traits.is_legacy_build
        assert seasoned_baseline(traits) == LEGACY_BASELINE

    def test_no_flags_is_neutral(self):
        assert seasoned_baseline(parse_traits(_make_character())) == Attributes()

    def test_elf_rogue_seasoning(self):
        stats = seasoned_baseline(parse_traits(_make_character({"race.elf", "class.rogue"})))
        assert stats == Attributes(
            strength=9, dexterity=14, intelligence=12, vitality=9,
            charisma=10, perception=11, luck=10,
        )

    def test_human_warrior_without_champion_is_seasoned(self):
        stats = seasoned_baseline(parse_traits(_make_character({"race.human", "class.warrior", "spec.berserker"})))
        assert stats.strength == 10 + 1 + 2 + 1
        assert stats.vitality == 11
        assert stats.luck == 11


class TestProficiency:
    """Tests for is_proficient()."""

    def test_warrior_wields_everything(self):
        assert all(is_proficient(CharacterClass.WARRIOR, c) for c in WeaponCategory)

    def test_mage(self):
        assert is_proficient(CharacterClass.MAGE, WeaponCategory.ONE_HANDED)
        assert is_proficient(CharacterClass.MAGE, WeaponCategory.DAGGER)
        assert is_proficient(CharacterClass.MAGE, WeaponCategory.RANGED)
        assert not is_proficient(CharacterClass.MAGE, WeaponCategory.STAFF)
        assert not is_proficient(CharacterClass.MAGE, WeaponCategory.TWO_HANDED)

    def test_mage_with_short_sword(self, catalog):
        mage = _make_character({"class.mage"}, {EquipmentSlot.WEAPON: "ITM_SWORD_SHORT"})
        profile = build_player_profile(mage, catalog)
        assert profile.proficient
        assert profile.attack_bonus == 2  # proficiency + STR 10

    def test_mage_with_staff(self, catalog):
        mage = _make_character({"class.mage"}, {EquipmentSlot.WEAPON: "ITM_STAFF_OAK"})
        profile = build_player_profile(mage, catalog)
        assert not profile.proficient
        assert profile.attack_bonus == 1  # INT 13, no proficiency bonus

    def test_unknown_class_flag_overrides_archetype(self, catalog):
        paladin = _make_character(
            {"class.paladin"}, {EquipmentSlot.WEAPON: "ITM_GREATAXE"}, archetype="Warrior",
        )
        assert parse_traits(paladin).primary_class is None
        assert not build_player_profile(paladin, catalog).proficient

    def test_rogue(self):
        assert is_proficient(CharacterClass.ROGUE, WeaponCategory.DAGGER)
        assert not is_proficient(CharacterClass.ROGUE, WeaponCategory.STAFF)

    def test_classless(self):
        assert is_proficient(None, WeaponCategory.ONE_HANDED)
        assert not is_proficient(None, WeaponCategory.TWO_HANDED)

    def test_unarmed_always_proficient(self):
        assert all(is_proficient(k, WeaponCategory.UNARMED) for k in (*CharacterClass, None))

    def test_unproficient_loses_attack_bonus(self, catalog):
        mage = _make_character({"class.mage"}, {EquipmentSlot.WEAPON: "ITM_GREATAXE"})
        warrior = _make_character({"class.warrior"}, {EquipmentSlot.WEAPON: "ITM_GREATAXE"})
        mage_profile = build_player_profile(mage, catalog)
        warrior_profile = build_player_profile(warrior, catalog)
        assert not mage_profile.proficient
        assert mage_profile.attack_bonus == 0
        assert warrior_profile.proficient
        assert warrior_profile.attack_bonus == 2 + 1  # proficiency + STR 12


class TestEffectiveAttributes:
    """Tests for effective_attributes()."""

    def test_equipment_bonuses_summed(self, catalog):
        char = _make_character(equipment={
            EquipmentSlot.WEAPON: "ITM_DAGGER",        # +1 DEX
            EquipmentSlot.CHEST: "ITM_ARMOR_PLATE",    # -1 DEX
        })
        assert effective_attributes(char, catalog).dexterity == 10

    def test_unknown_items_contribute_nothing(self, catalog):
        char = _make_character(equipment={
            EquipmentSlot.WEAPON: "ITM_DOES_NOT_EXIST",
            EquipmentSlot.HEAD: "   ",
        })
        assert effective_attributes(char, catalog) == Attributes()

    def test_tutorial_character(self, catalog):
        assert effective_attributes(tutorial_character(), catalog) == LEGACY_BASELINE


class TestWeapons:
    """Tests for resolve_weapon() and crit math."""

    @pytest.mark.parametrize(
        "item_id, category, die, attr, pen",
        [
            ("ITM_DAGGER", WeaponCategory.DAGGER, 4, Attribute.DEXTERITY, 0),
            ("ITM_SWORD_SHORT", WeaponCategory.ONE_HANDED, 6, Attribute.STRENGTH, 1),
            ("ITM_GREATAXE", WeaponCategory.TWO_HANDED, 10, Attribute.STRENGTH, 2),
            ("ITM_BOW_HUNTING", WeaponCategory.RANGED, 8, Attribute.DEXTERITY, 0),
            ("ITM_STAFF_OAK", WeaponCategory.STAFF, 6, Attribute.INTELLIGENCE, 0),
        ],
    )
    def test_weapon_table(self, catalog, item_id, category, die, attr, pen):
        weapon = resolve_weapon(_make_character(equipment={EquipmentSlot.WEAPON: item_id}), catalog)
        assert weapon.category is category
        assert weapon.die == die
        assert weapon.attribute is attr
        assert weapon.penetration == pen

    def test_empty_slot_is_unarmed(self, catalog):
        weapon = resolve_weapon(_make_character(), catalog)
        assert weapon.category is WeaponCategory.UNARMED
        assert weapon.die == 4
        assert weapon.attribute is Attribute.STRENGTH
        assert weapon.label == "Unarmed"

    def test_non_weapon_in_weapon_slot_is_unarmed(self, catalog):
        weapon = resolve_weapon(_make_character(equipment={EquipmentSlot.WEAPON: "ITM_SHIELD_WOOD"}), catalog)
        assert weapon.category is WeaponCategory.UNARMED

    def test_uncategorised_weapon_is_one_handed(self):
        catalog = ItemCatalog.from_items([ItemDef(id="ITM_CLUB", name="Club", type=ItemType.WEAPON)])
        weapon = resolve_weapon(_make_character(equipment={EquipmentSlot.WEAPON: "ITM_CLUB"}), catalog)
        assert weapon.category is WeaponCategory.ONE_HANDED
        assert weapon.label == "One-Handed"

    def test_crit_thresholds(self):
        plain = parse_traits(_make_character())
        champion = parse_traits(_make_character({"spec.champion"}))
        assert crit_threshold(plain, WeaponCategory.ONE_HANDED) == 20
        assert crit_threshold(champion, WeaponCategory.ONE_HANDED) == 19
        assert crit_threshold(plain, WeaponCategory.DAGGER) == 19
        assert crit_threshold(champion, WeaponCategory.DAGGER) == 18

    def test_extra_crit_chance(self):
        plain = parse_traits(_make_character())
        champion = parse_traits(_make_character({"spec.champion"}))
        assert extra_crit_chance(plain, Attributes()) == 0.0
        assert extra_crit_chance(plain, Attributes(luck=5)) == 0.0
        assert extra_crit_chance(champion, Attributes()) == pytest.approx(0.05)
        assert extra_crit_chance(plain, Attributes(luck=15)) == pytest.approx(0.05)
        assert extra_crit_chance(champion, Attributes(luck=60)) == pytest.approx(0.30)


class TestDefenses:
    """Tests for armor class and damage reduction."""

    def test_unarmored(self, catalog):
        profile = build_player_profile(_make_character(), catalog)
        assert profile.armor_class == 10
        assert profile.damage_reduction == 0
        assert not profile.has_shield
        assert profile.block_chance == 0.0

    def test_tutorial_kit(self, catalog):
        profile = build_player_profile(tutorial_character(), catalog)
        assert profile.armor_class == 10 + 0 + 1 + 2   # cloth cap, leather, shield
        assert profile.damage_reduction == 1 + 1
        assert profile.has_shield
        assert profile.block_chance == pytest.approx(0.20)

    def test_full_plate(self, catalog):
        char = _make_character(equipment={
            EquipmentSlot.HEAD: "ITM_HELM_PLATE",
            EquipmentSlot.CHEST: "ITM_ARMOR_PLATE",
            EquipmentSlot.OFFHAND: "ITM_SHIELD_WOOD",
        })
        profile = build_player_profile(char, catalog)
        assert profile.armor_class == 10 - 1 + 1 + 2 + 2   # DEX 9 from the cuirass
        assert profile.damage_reduction == 3 + 1

    def test_armor_in_offhand_is_not_a_shield(self, catalog):
        char = _make_character(equipment={EquipmentSlot.OFFHAND: "ITM_ARMOR_PLATE"})
        profile = build_player_profile(char, catalog)
        assert not profile.has_shield
        assert profile.damage_reduction == 0

    def test_dexterity_raises_armor_class(self):
        catalog = ItemCatalog.from_items([
            ItemDef(id="ITM_CLOAK", name="Cloak", type=ItemType.ARMOR, slot=EquipmentSlot.CHEST,
                    bonuses=AttributeDelta(dexterity=6)),
        ])
        profile = build_player_profile(_make_character(equipment={EquipmentSlot.CHEST: "ITM_CLOAK"}), catalog)
        assert profile.armor_class == 13


class TestPlayerProfile:
    """Tests for build_player_profile() HP handling."""

    def test_max_hp_from_attributes(self, catalog):
        assert build_player_profile(tutorial_character(), catalog).max_hp == 144

    def test_degenerate_attributes_fall_back_to_current_hp(self):
        catalog = ItemCatalog.from_items([
            ItemDef(id="ITM_CURSE", name="Curse", type=ItemType.ARMOR, slot=EquipmentSlot.HEAD,
                    bonuses=AttributeDelta(vitality=-20, strength=-20)),
        ])
        char = _make_character(equipment={EquipmentSlot.HEAD: "ITM_CURSE"}, hp=7)
        assert build_player_profile(char, catalog).max_hp == 7


class TestOpponentProfile:
    """Tests for build_opponent_profile()."""

    def test_defaults_when_stats_missing(self):
        profile = build_opponent_profile(OpponentDef(id="E", name="Shade", level=2))
        assert profile.attributes == Attributes.uniform(8)
        assert profile.hp == 96 // 2 + 4
        assert profile.resource == 56
        assert profile.armor_class == 10 - 1 + 2
        assert profile.damage_reduction == 1
        assert profile.attack_bonus == 2 - 1

    def test_overrides(self):
        profile = build_opponent_profile(
            OpponentDef(id="E", name="Brute", level=3, base_stats=Attributes(strength=16, vitality=15),
                        hp=30, resource=0)
        )
        assert profile.hp == 30
        assert profile.resource == 0
        assert profile.damage_reduction == 3
        assert profile.attack_bonus == 3 + 3
        assert profile.damage_modifier == 3

    def test_hp_never_below_one(self):
        assert build_opponent_profile(OpponentDef(id="E", name="Wisp", hp=0)).hp == 1

    def test_every_starter_item_resolves(self, catalog):
        assert len(catalog) == len(STARTER_ITEMS)
