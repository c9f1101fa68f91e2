"""Marathon 2 physics layout.

Stream order: monsters, effects, projectiles, player physics models, weapons.
All values big-endian. Optional fields store NONE (-1) when absent.
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
    M2_EFFECT_FLAGS,
    M2_PROJECTILE_FLAGS,
    M2_WEAPON_FLAGS,
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

NUMBER_OF_MONSTER_TYPES = 47
NUMBER_OF_EFFECT_TYPES = 69
NUMBER_OF_PROJECTILE_TYPES = 39
NUMBER_OF_PHYSICS_MODELS = 2
NUMBER_OF_WEAPONS = 10

SIZE_OF_MONSTER_DEFINITION = 156
SIZE_OF_EFFECT_DEFINITION = 14
SIZE_OF_PROJECTILE_DEFINITION = 48
SIZE_OF_PHYSICS_CONSTANTS = 104
SIZE_OF_WEAPON_DEFINITION = 134


def _opt(name: str, **kw):
    return u16(name, optional=True, **kw)


def _shape(prefix: str = ""):
    # collection in the low 5 bits, color table above it
    return (
        _opt(f"{prefix}collection", mask=COLLECTION_MASK),
        Overlay(_opt(f"{prefix}clut", shift=CLUT_SHIFT)),
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


MONSTER_FIELDS = pack(
    *_shape(),
    _opt("vitality"),
    u32("immunities", R.BITFIELD),
    u32("weaknesses", R.BITFIELD),
    u32("flags", R.FLAGS, names=MONSTER_FLAGS),
    i32("class", optional=True),
    u32("friends", R.BITFIELD),
    u32("enemies", R.BITFIELD),
    i32("sound_pitch", R.FIXED, scale=FIXED_ONE),
    _opt("activation_sound"),
    _opt("friendly_activation_sound"),
    _opt("clear_sound"),
    _opt("kill_sound"),
    _opt("apology_sound"),
    _opt("friendly_fire_sound"),
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
    _opt("contrail_effect"),
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
    # stored as shape descriptors, but they hold sequence indices
    _opt("hit_sequence"),
    _opt("hard_dying_sequence"),
    _opt("soft_dying_sequence"),
    _opt("hard_dead_sequence"),
    _opt("soft_dead_sequence"),
    _opt("stationary_sequence"),
    _opt("moving_sequence"),
    _opt("teleport_in_sequence"),
    _opt("teleport_out_sequence"),
    _opt("attack_frequency"),
    *_attack("melee_attack"),
    *_attack("ranged_attack"),
)

EFFECT_FIELDS = pack(
    *_shape(),
    _opt("sequence"),
    i32("sound_pitch", R.FIXED, scale=FIXED_ONE),
    u16("flags", R.FLAGS, names=M2_EFFECT_FLAGS),
    _opt("delay"),
    _opt("delay_sound"),
)

PROJECTILE_FIELDS = pack(
    *_shape(),
    _opt("sequence"),
    _opt("detonation_effect"),
    _opt("media_detonation_effect"),
    _opt("contrail_effect"),
    _opt("ticks_between_contrails"),
    _opt("maximum_contrails"),
    _opt("media_projectile_promotion"),
    i16("radius", R.DISTANCE),
    i16("area_of_effect", R.DISTANCE),
    *_damage("damage"),
    u32("flags", R.FLAGS, names=M2_PROJECTILE_FLAGS),
    i16("speed", R.VELOCITY),
    i16("maximum_range", R.DISTANCE),
    i32("sound_pitch", R.FIXED, scale=FIXED_ONE),
    _opt("flyby_sound"),
    _opt("rebound_sound"),
)

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
    i32("splash_height", R.DISTANCE, scale=FIXED_ONE),
    i32("half_camera_separation", R.DISTANCE, scale=FIXED_ONE),
)


def _trigger(prefix: str):
    return (
        _opt(f"{prefix}.rounds_per_magazine"),
        _opt(f"{prefix}.ammunition_type"),
        _opt(f"{prefix}.ticks_per_round"),
        _opt(f"{prefix}.recovery_ticks"),
        _opt(f"{prefix}.charging_ticks"),
        i16(f"{prefix}.recoil_magnitude", R.VELOCITY),
        _opt(f"{prefix}.firing_sound"),
        _opt(f"{prefix}.click_sound"),
        _opt(f"{prefix}.charging_sound"),
        _opt(f"{prefix}.shell_casing_sound"),
        _opt(f"{prefix}.reloading_sound"),
        _opt(f"{prefix}.charged_sound"),
        _opt(f"{prefix}.projectile_type"),
        i16(f"{prefix}.theta_error", R.ANGLE),
        i16(f"{prefix}.dx", R.DISTANCE),
        i16(f"{prefix}.dz", R.DISTANCE),
        _opt(f"{prefix}.shell_casing_type"),
        _opt(f"{prefix}.burst_count"),
    )


WEAPON_FIELDS = pack(
    _opt("item_type"),
    _opt("powerup_type"),
    _opt("weapon_class", rule=R.ENUM, names=WEAPON_CLASS),
    u16("flags", R.FLAGS, names=M2_WEAPON_FLAGS),
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
    _opt("ready_ticks"),
    _opt("await_reload_ticks"),
    _opt("loading_ticks"),
    _opt("finish_loading_ticks"),
    _opt("powerup_ticks"),
    *_trigger("primary_trigger"),
    *_trigger("secondary_trigger"),
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
