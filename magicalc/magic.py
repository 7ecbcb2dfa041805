"""
Magic Records
=============
The compiled form of a spell definition. Every field except the name
has a default, so a bare ``register <name>`` is already a complete spell.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum

from .tables import render_table


class MagicError(Exception):
    """Base class for every error raised by magicalc."""
    pass


class MagicRank(IntEnum):
    """Ordinal power tiers, lowest to highest."""
    COMMON    = 0
    UNCOMMON  = 1
    EPIC      = 2
    LEGENDARY = 3
    MYTHIC    = 4
    DIVINE    = 5

    @classmethod
    def from_int(cls, value: int) -> "MagicRank":
        """Map a rank number to its tier. Out-of-range numbers fold to COMMON."""
        try:
            return cls(value)
        except ValueError:
            return cls.COMMON


class MagicType(Enum):
    """Binary spell alignment. Changes the accuracy and defense formulas."""
    ORDER = "ORDER"
    CHAOS = "CHAOS"


@dataclass(frozen=True)
class Magic:
    """
    A compiled spell definition.

      - name:         Used to derive every registered function name
      - rank:         Power tier
      - type:         ORDER or CHAOS
      - always_def:   Spell is defensive by default (inverts the plain name)
      - table_addon:  Offset added to the default table accuracy of 10
      - race_mult:    Multiplier applied to all computed output
    """
    name: str
    rank: MagicRank = MagicRank.COMMON
    type: MagicType = MagicType.ORDER
    always_def: bool = False
    table_addon: int = 0
    race_mult: float = 1.0


def describe_all(magics: list[Magic]) -> str:
    """Return a formatted table of compiled spells for REPL help."""
    if not magics:
        return "  (no spells loaded)"
    rows = [
        (m.name, m.rank.name.capitalize(), m.type.value,
         "yes" if m.always_def else "no", m.table_addon, m.race_mult)
        for m in magics
    ]
    return render_table(("Spell", "Rank", "Type", "Def", "Addon", "Mult"), rows)
