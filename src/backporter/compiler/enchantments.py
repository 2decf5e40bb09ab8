"""
Legacy naming rules for stored enchantments.
"""

# Legacy display names for the two curses.
CURSE_NAMES = {
    "binding_curse": "curse_of_binding",
    "vanishing_curse": "curse_of_vanishing",
}

# Enchantments whose legacy names never carry a level suffix.
NO_LEVEL_SUFFIX = frozenset(
    {
        "aqua_affinity",
        "channeling",
        "flame",
        "infinity",
        "mending",
        "multishot",
        "silk_touch",
    }
)


def legacy_name(enchantment: str) -> str:
    """Map an enchantment name to its legacy display name."""
    name = enchantment.split(":", 1)[-1]
    return CURSE_NAMES.get(name, name)


def variant_name(enchantment: str, level: int) -> str:
    """Build the legacy variant name for an enchantment at a level.

    >>> variant_name("sharpness", 3)
    'sharpness_3'
    >>> variant_name("minecraft:channeling", 1)
    'channeling'
    >>> variant_name("binding_curse", 1)
    'curse_of_binding'
    """
    name = enchantment.split(":", 1)[-1]
    base = legacy_name(name)
    if name in NO_LEVEL_SUFFIX or name in CURSE_NAMES or level == 1:
        return base
    return f"{base}_{level}"
