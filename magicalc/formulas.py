"""
Spell Formulas
==============
Pure numeric functions behind every registered spell function.

    total      = mana * floor(multiplier(rank, type))
    effective  = floor(total * accuracy_factor(accr, type) * race_mult)
    life       = floor(1.3 * effective)                 ORDER
               = floor(1.3 * effective - ln(effective)) CHAOS

CHAOS accuracy depends on the parity of the raw accuracy input, so the
curve is deliberately not monotonic.
"""
import math

from .magic import MagicError, MagicRank, MagicType


class FormulaError(MagicError):
    """A formula produced a value that is not a finite number."""
    pass


MULTIPLIERS: dict[tuple[MagicRank, MagicType], float] = {
    (MagicRank.COMMON,    MagicType.ORDER): 4.0,
    (MagicRank.COMMON,    MagicType.CHAOS): 5.5,
    (MagicRank.UNCOMMON,  MagicType.ORDER): 6.0,
    (MagicRank.UNCOMMON,  MagicType.CHAOS): 7.5,
    (MagicRank.EPIC,      MagicType.ORDER): 9.0,
    (MagicRank.EPIC,      MagicType.CHAOS): 10.5,
    (MagicRank.LEGENDARY, MagicType.ORDER): 13.0,
    (MagicRank.LEGENDARY, MagicType.CHAOS): 14.5,
    (MagicRank.MYTHIC,    MagicType.ORDER): 18.0,
    (MagicRank.MYTHIC,    MagicType.CHAOS): 19.5,
    (MagicRank.DIVINE,    MagicType.ORDER): 24.0,
    (MagicRank.DIVINE,    MagicType.CHAOS): 25.5,
}

DEFENSE_FACTOR = 1.3


def multiplier(rank: MagicRank, typ: MagicType) -> float:
    return MULTIPLIERS[(rank, typ)]


def total_damage(mana: int, rank: MagicRank, typ: MagicType) -> float:
    return mana * math.floor(multiplier(rank, typ))


def accuracy_factor(accr: int, typ: MagicType) -> float:
    """Accuracy scaling. Odd CHAOS accuracy uses the steeper 0.18/8 slope."""
    if typ == MagicType.CHAOS and accr % 2 != 0:
        return 0.5 + accr * 0.18 / 8.0
    return 0.5 + accr * 0.025


def _to_int(value: float) -> int:
    if not math.isfinite(value):
        raise FormulaError(f"Result is not a finite number ({value})")
    return math.floor(value)


def _damage(accr: int, mana: int, rank: MagicRank, typ: MagicType, mult: float) -> float:
    try:
        return total_damage(mana, rank, typ) * accuracy_factor(accr, typ) * mult
    except OverflowError:
        raise FormulaError(f"Accuracy {accr} or mana {mana} is too large to compute") from None


def effective_damage_raw(accr: int, mana: int, rank: MagicRank, typ: MagicType,
                         mult: float) -> float:
    """Floored effective damage, kept as a float for the defense formula."""
    value = _damage(accr, mana, rank, typ, mult)
    if not math.isfinite(value):
        return value
    return float(math.floor(value))


def effective_damage(accr: int, mana: int, rank: MagicRank, typ: MagicType,
                     mult: float) -> int:
    """Attack damage. Truncates with floor, never rounds."""
    return _to_int(_damage(accr, mana, rank, typ, mult))


def defense_life(accr: int, mana: int, rank: MagicRank, typ: MagicType,
                 mult: float) -> int:
    """
    Defensive life value.

    For CHAOS the natural log of the effective damage is subtracted. The
    logarithm is undefined for r <= 0; in that case it contributes nothing.
    """
    r = effective_damage_raw(accr, mana, rank, typ, mult)
    life = DEFENSE_FACTOR * r
    if typ == MagicType.CHAOS and r > 0:
        life -= math.log(r)
    return _to_int(life)
