"""Flag bit names and enum lookup tuples for physics record fields."""
from __future__ import annotations


def lookup_enum(table: tuple[str, ...], value: int) -> str:
    """Return human-readable name for an enum value, or str(value) for unknowns."""
    if 0 <= value < len(table):
        return table[value]
    return str(value)


# Monster flags (32-bit word, identical bit assignment in both games)
MONSTER_FLAGS: tuple[str, ...] = (
    "omniscient",
    "flies",
    "is_alien",
    "major",
    "minor",
    "cannot_skip",
    "floats",
    "cannot_attack",
    "uses_sniper_ledges",
    "is_invisible",
    "is_subtly_invisible",
    "kamikaze",
    "berserker",
    "enlarged",
    "delayed_hard_death",
    "fires_symmetrically",
    "nuclear_hard_death",
    "cannot_fire_backwards",
    "can_die_in_flames",
    "waits_with_clear_shot",
    "tiny",
    "attacks_immediately",
    "not_afraid_of_water",
    "not_afraid_of_sewage",
    "not_afraid_of_lava",
    "not_afraid_of_goo",
    "can_teleport_under_media",
    "chooses_weapons_randomly",
)

DAMAGE_FLAGS: tuple[str, ...] = (
    "alien_damage",
)

# Effect flags (16-bit word)
M1_EFFECT_FLAGS: tuple[str, ...] = (
    "end_when_animation_loops",
    "end_when_transfer_animation_loops",
    "sound_only",
    "make_twin_visible",
)

M2_EFFECT_FLAGS: tuple[str, ...] = M1_EFFECT_FLAGS + (
    "media_effect",
)

# Projectile flags (16-bit word in M1, 32-bit in M2)
M1_PROJECTILE_FLAGS: tuple[str, ...] = (
    "guided",
    "stop_when_animation_loops",
    "persistent",
    "alien",
    "affected_by_gravity",
    "no_horizontal_error",
    "no_vertical_error",
    "can_toggle_control_panels",
    "positive_vertical_error",
    "melee",
    "persistent_and_virulent",
    "usually_pass_transparent_side",
    "sometimes_pass_transparent_side",
    "doubly_affected_by_gravity",
)

M2_PROJECTILE_FLAGS: tuple[str, ...] = M1_PROJECTILE_FLAGS + (
    "rebounds_from_floor",
    "penetrates_media",
    "becomes_item_on_detonation",
    "bleeding_projectile",
    "horizontal_wander",
    "vertical_wander",
    "affected_by_half_gravity",
    "penetrates_media_boundary",
    "passes_through_objects",
)

# Weapon flags (16-bit word)
M1_WEAPON_FLAGS: tuple[str, ...] = (
    "is_automatic",
    "unknown",
    "disappears_after_use",
)

M2_WEAPON_FLAGS: tuple[str, ...] = (
    "is_automatic",
    "disappears_after_use",
    "plays_instant_shell_casing_sound",
    "overloads",
    "has_random_ammo_on_pickup",
    "powerup_is_temporary",
    "reloads_in_one_hand",
    "fires_out_of_phase",
    "fires_under_media",
    "triggers_share_ammo",
    "secondary_has_angular_flipping",
)

# Weapon class
WEAPON_CLASS: tuple[str, ...] = (
    "melee",
    "normal",
    "dual_function",
    "dual_wield",
    "multipurpose",
)
