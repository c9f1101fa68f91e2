"""Marathon 1 physics layout.

Same record classes as Marathon 2 but with smaller records: fewer monster
sounds, no pitch fields, 16-bit projectile flags, and weapon triggers stored
interleaved (primary value, secondary value) instead of one block per trigger.
"""
from __future__ import annotations

from marathonphysics.physics.constants import (
    CLUT_SHIFT,
    COLLECTION_MASK,
    EFFECT_DEFINITIONS,
    FIXED_ONE,
    MONSTER_DEFINITIONS,
    PHYSICS_MODELS,
    PROJECTILE_DEFINITIONS,
    WEAPON_DEFINITIONS,
)
from marathonphysics.physics.enums import (
    DAMAGE_FLAGS,
    M1_EFFECT_FLAGS,
    M1_PROJECTILE_FLAGS,
    M1_WEAPON_FLAGS,
    MONSTER_FLAGS,
    WEAPON_CLASS,
)
from marathonphysics.physics.records import (
    ConversionRule as R,
    Overlay,
    RecordClassSpec,
    i16,
    i32,
    pack,
    padding,
    u16,
    u32,
)

NUMBER_OF_MONSTER_TYPES = 38
NUMBER_OF_EFFECT_TYPES = 46
NUMBER_OF_PROJECTILE_TYPES = 28
NUMBER_OF_PHYSICS_MODELS = 2
NUMBER_OF_WEAPONS = 8

SIZE_OF_MONSTER_DEFINITION = 138
SIZE_OF_EFFECT_DEFINITION = 6
SIZE_OF_PROJECTILE_DEFINITION = 36
SIZE_OF_PHYSICS_CONSTANTS = 100
SIZE_OF_WEAPON_DEFINITION = 120

PRIMARY = "primary_trigger"
SECONDARY = "secondary_trigger"


def _opt(name: str, **kw):
    return u16(name, optional=True, **kw)


def _shape():
    return (
        _opt("collection", mask=COLLECTION_MASK),
        Overlay(_opt("clut", shift=CLUT_SHIFT)),
    )


def _damage(prefix: str):
    return (
        _opt(f"{prefix}.type"),
        u16(f"{prefix}.flags", R.FLAGS, names=DAMAGE_FLAGS),
        i16(f"{prefix}.base"),
        i16(f"{prefix}.random"),
        i32(f"{prefix}.scale", R.FIXED, scale=FIXED_ONE),
    )


def _attack(prefix: str):
    return (
        _opt(f"{prefix}.projectile_type"),
        _opt(f"{prefix}.repetitions"),
        i16(f"{prefix}.error", R.ANGLE),
        i16(f"{prefix}.range", R.DISTANCE),
        _opt(f"{prefix}.attack_sequence"),
        i16(f"{prefix}.dx", R.DISTANCE),
        i16(f"{prefix}.dy", R.DISTANCE),
        i16(f"{prefix}.dz", R.DISTANCE),
    )


def _both(field: str, build=_opt, **kw):
    """One value per trigger, primary first."""
    return (
        build(f"{PRIMARY}.{field}", **kw),
        build(f"{SECONDARY}.{field}", **kw),
    )


MONSTER_FIELDS = pack(
    *_shape(),
    _opt("vitality"),
    u32("immunities", R.BITFIELD),
    u32("weaknesses", R.BITFIELD),
    u32("flags", R.FLAGS, names=MONSTER_FLAGS),
    i32("class", optional=True),
    u32("friends", R.BITFIELD),
    u32("enemies", R.BITFIELD),
    _opt("activation_sound"),
    _opt("conversation_sound"),
    _opt("flaming_sound"),
    _opt("random_sound"),
    _opt("random_sound_mask"),
    _opt("carrying_item_type"),
    i16("radius", R.DISTANCE),
    i16("height", R.DISTANCE),
    i16("preferred_hover_height", R.DISTANCE),
    i16("minimum_ledge_delta", R.DISTANCE),
    i16("maximum_ledge_delta", R.DISTANCE),
    i32("external_velocity_scale", R.FIXED, scale=FIXED_ONE),
    _opt("impact_effect"),
    _opt("melee_impact_effect"),
    i16("half_visual_arc", R.ANGLE),
    i16("half_vertical_visual_arc", R.ANGLE),
    i16("visual_range", R.DISTANCE),
    i16("dark_visual_range", R.DISTANCE),
    _opt("intelligence"),
    i16("speed", R.VELOCITY),
    i16("gravity", R.ACCELERATION),
    i16("terminal_velocity", R.VELOCITY),
    _opt("door_retry_mask"),
    i16("shrapnel_radius", R.DISTANCE, optional=True),
    *_damage("shrapnel_damage"),
    _opt("hit_sequence"),
    _opt("hard_dying_sequence"),
    _opt("soft_dying_sequence"),
    _opt("hard_dead_sequence"),
    _opt("soft_dead_sequence"),
    _opt("stationary_sequence"),
    _opt("moving_sequence"),
    _opt("attack_frequency"),
    *_attack("melee_attack"),
    *_attack("ranged_attack"),
)

EFFECT_FIELDS = pack(
    *_shape(),
    _opt("sequence"),
    u16("flags", R.FLAGS, names=M1_EFFECT_FLAGS),
)

PROJECTILE_FIELDS = pack(
    *_shape(),
    _opt("sequence"),
    _opt("detonation_effect"),
    _opt("contrail_effect"),
    _opt("ticks_between_contrails"),
    _opt("maximum_contrails"),
    i16("radius", R.DISTANCE),
    i16("area_of_effect", R.DISTANCE),
    *_damage("damage"),
    u16("flags", R.FLAGS, names=M1_PROJECTILE_FLAGS),
    i16("speed", R.VELOCITY),
    i16("maximum_range", R.DISTANCE),
    _opt("flyby_sound"),
)

# Marathon 1 has no splash_height
PHYSICS_FIELDS = pack(
    i32("maximum_forward_velocity", R.VELOCITY, scale=FIXED_ONE),
    i32("maximum_backward_velocity", R.VELOCITY, scale=FIXED_ONE),
    i32("maximum_perpendicular_velocity", R.VELOCITY, scale=FIXED_ONE),
    i32("acceleration", R.ACCELERATION, scale=FIXED_ONE),
    i32("deceleration", R.ACCELERATION, scale=FIXED_ONE),
    i32("airborne_deceleration", R.ACCELERATION, scale=FIXED_ONE),
    i32("gravitational_acceleration", R.ACCELERATION, scale=FIXED_ONE),
    i32("climbing_acceleration", R.ACCELERATION, scale=FIXED_ONE),
    i32("terminal_velocity", R.VELOCITY, scale=FIXED_ONE),
    i32("external_deceleration", R.ACCELERATION, scale=FIXED_ONE),
    i32("angular_acceleration", R.ANGLE, scale=FIXED_ONE),
    i32("angular_deceleration", R.ANGLE, scale=FIXED_ONE),
    i32("maximum_angular_velocity", R.ANGLE, scale=FIXED_ONE),
    i32("angular_recentering_velocity", R.ANGLE, scale=FIXED_ONE),
    i32("fast_angular_velocity", R.ANGLE, scale=FIXED_ONE),
    i32("fast_angular_maximum", R.ANGLE, scale=FIXED_ONE),
    i32("maximum_elevation", R.ANGLE, scale=FIXED_ONE),
    i32("external_angular_deceleration", R.ANGLE, scale=FIXED_ONE),
    i32("step_delta", R.DISTANCE, scale=FIXED_ONE),
    i32("step_amplitude", R.DISTANCE, scale=FIXED_ONE),
    i32("radius", R.DISTANCE, scale=FIXED_ONE),
    i32("height", R.DISTANCE, scale=FIXED_ONE),
    i32("dead_height", R.DISTANCE, scale=FIXED_ONE),
    i32("camera_height", R.DISTANCE, scale=FIXED_ONE),
    i32("half_camera_separation", R.DISTANCE, scale=FIXED_ONE),
)

WEAPON_FIELDS = pack(
    _opt("item_type"),
    _opt("weapon_class", rule=R.ENUM, names=WEAPON_CLASS),
    u16("flags", R.FLAGS, names=M1_WEAPON_FLAGS),
    _opt(f"{PRIMARY}.ammunition_type"),
    _opt(f"{PRIMARY}.rounds_per_magazine"),
    _opt(f"{SECONDARY}.ammunition_type"),
    _opt(f"{SECONDARY}.rounds_per_magazine"),
    i32("firing_light_intensity", R.FIXED, scale=FIXED_ONE),
    _opt("firing_intensity_decay_ticks"),
    i32("idle_height", R.FIXED, scale=FIXED_ONE),
    i32("bob_amplitude", R.FIXED, scale=FIXED_ONE),
    i32("kick_height", R.FIXED, scale=FIXED_ONE),
    i32("reload_height", R.FIXED, scale=FIXED_ONE),
    i32("idle_width", R.FIXED, scale=FIXED_ONE),
    i32("horizontal_amplitude", R.FIXED, scale=FIXED_ONE),
    _opt("collection"),
    _opt("idle_sequence"),
    _opt("firing_sequence"),
    _opt("reloading_sequence"),
    padding(2),
    _opt("charging_sequence"),
    _opt("charged_sequence"),
    *_both("ticks_per_round"),
    _opt("await_reload_ticks"),
    _opt("ready_ticks"),
    *_both("recovery_ticks"),
    *_both("charging_ticks"),
    *_both("recoil_magnitude", i16, rule=R.VELOCITY),
    *_both("firing_sound"),
    *_both("click_sound"),
    # only the primary trigger has a reloading sound
    _opt(f"{PRIMARY}.reloading_sound"),
    # one charging sound shared by both triggers
    _opt(f"{PRIMARY}.charging_sound"),
    Overlay(_opt(f"{SECONDARY}.charging_sound")),
    *_both("shell_casing_sound"),
    *_both("sound_activation_range", i16, rule=R.DISTANCE),
    *_both("projectile_type"),
    *_both("theta_error", i16, rule=R.ANGLE),
    i16(f"{PRIMARY}.dx", R.DISTANCE),
    i16(f"{PRIMARY}.dz", R.DISTANCE),
    i16(f"{SECONDARY}.dx", R.DISTANCE),
    i16(f"{SECONDARY}.dz", R.DISTANCE),
    *_both("burst_count"),
    padding(2),
)

RECORD_CLASSES: tuple[RecordClassSpec, ...] = (
    RecordClassSpec(MONSTER_DEFINITIONS, MONSTER_FIELDS,
                    SIZE_OF_MONSTER_DEFINITION, NUMBER_OF_MONSTER_TYPES,
                    "monster physics",
                    null_when=("melee_attack.projectile_type", "ranged_attack.projectile_type")),
    RecordClassSpec(EFFECT_DEFINITIONS, EFFECT_FIELDS,
                    SIZE_OF_EFFECT_DEFINITION, NUMBER_OF_EFFECT_TYPES,
                    "effect physics"),
    RecordClassSpec(PROJECTILE_DEFINITIONS, PROJECTILE_FIELDS,
                    SIZE_OF_PROJECTILE_DEFINITION, NUMBER_OF_PROJECTILE_TYPES,
                    "projectile physics"),
    RecordClassSpec(PHYSICS_MODELS, PHYSICS_FIELDS,
                    SIZE_OF_PHYSICS_CONSTANTS, NUMBER_OF_PHYSICS_MODELS,
                    "player physics (walking, running)"),
    RecordClassSpec(WEAPON_DEFINITIONS, WEAPON_FIELDS,
                    SIZE_OF_WEAPON_DEFINITION, NUMBER_OF_WEAPONS,
                    "weapon physics"),
)
