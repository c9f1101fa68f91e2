"""Physics file format constants and engine unit scales."""

# Angular resolution: a full circle is 512 angle units
FULL_CIRCLE = 512
HALF_CIRCLE = FULL_CIRCLE // 2

# World distances are 6.10 fixed point: 1024 internal units per world unit
WORLD_ONE = 1024

# 16.16 fixed point (player physics models, scales, pitches)
FIXED_ONE = 65536

# Storage widths permitted in a field layout
FIELD_WIDTHS = frozenset({1, 2, 4})

# The shape descriptor's collection index occupies the low 5 bits
COLLECTION_MASK = 0x1F
CLUT_SHIFT = 5

# Record class names, in the order they appear in both variants
MONSTER_DEFINITIONS = "monster_definitions"
EFFECT_DEFINITIONS = "effect_definitions"
PROJECTILE_DEFINITIONS = "projectile_definitions"
PHYSICS_MODELS = "physics_models"
WEAPON_DEFINITIONS = "weapon_definitions"
