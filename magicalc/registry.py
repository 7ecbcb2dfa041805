"""
Spell Function Registry
=======================
Turns every compiled Magic into a family of named callables and stores
them in a FunctionRegistry that the expression Evaluator resolves calls
against.

Naming, per spell X:

    always_def = false              always_def = true
    X        → attack (acc, mana)   X       → defense table
    def_X    → defense (acc, mana)  at_X    → attack table
    t_X      → attack table         t_X     → defense table
    t_def_X  → defense table        t_at_X  → attack table

Each callable is a frozen record holding its own copy of the spell, so
nothing registered here shares mutable state.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from . import formulas
from .lexer import INT_MAX, INT_MIN
from .magic import Magic, MagicError
from .tables import render_table


class UsageError(MagicError):
    """A spell function was called with the wrong arguments."""
    pass


DEFAULT_TABLE_ACCURACY = 10
MAX_TABLE_ROWS = 10_000
TABLE_HEADERS = ("Mana", "Damage", "Accuracy")


def _is_int(value: Any) -> bool:
    """Calculator integers are 64-bit; bools and larger values do not qualify."""
    return isinstance(value, int) and not isinstance(value, bool) and INT_MIN <= value <= INT_MAX


# ─────────────────────────────────────────────────────────────
#  Spell Callables
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MagicFormula:
    """``name(accuracy, mana) -> int`` for one spell."""
    name: str
    magic: Magic
    defensive: bool

    @property
    def usage(self) -> str:
        return f"Use {self.name}(<accuracy>, <mana>)"

    def compute(self, accuracy: int, mana: int) -> int:
        m = self.magic
        if self.defensive:
            return formulas.defense_life(accuracy, mana, m.rank, m.type, m.race_mult)
        return formulas.effective_damage(accuracy, mana, m.rank, m.type, m.race_mult)

    def __call__(self, *args: Any) -> int:
        if len(args) != 2 or not all(_is_int(a) for a in args):
            raise UsageError(self.usage)
        return self.compute(*args)


@dataclass(frozen=True)
class MagicTable:
    """``name(start, end[, step[, accuracy]])``: prints a Mana/Damage/Accuracy table."""
    name: str
    magic: Magic
    defensive: bool
    output_fn: Callable[[str], None] = field(default=print, compare=False, repr=False)

    @property
    def usage(self) -> str:
        return f"Use {self.name}(<start>, <end>, <?step>, <?accuracy>)"

    @property
    def default_accuracy(self) -> int:
        return DEFAULT_TABLE_ACCURACY + self.magic.table_addon

    def rows(self, *args: Any) -> list[tuple[int, int, int]]:
        """Compute the table rows without printing them."""
        if len(args) not in (2, 3, 4) or not all(_is_int(a) for a in args):
            raise UsageError(self.usage)
        start, end = args[0], args[1]
        step = args[2] if len(args) >= 3 else 1
        accuracy = args[3] if len(args) == 4 else self.default_accuracy
        if step < 1:
            raise UsageError(f"{self.usage}: step must be a positive integer")
        count = max(0, (end - start) // step + 1)
        if count > MAX_TABLE_ROWS:
            raise UsageError(f"{self.usage}: at most {MAX_TABLE_ROWS} rows per table, got {count}")

        formula = MagicFormula(self.name, self.magic, self.defensive)
        return [
            (mana, formula.compute(accuracy, mana), accuracy)
            for mana in range(start, end + 1, step)
        ]

    def __call__(self, *args: Any) -> None:
        self.output_fn(render_table(TABLE_HEADERS, self.rows(*args)))


# ─────────────────────────────────────────────────────────────
#  Registry
# ─────────────────────────────────────────────────────────────

class FunctionRegistry:
    """
    Name → callable mapping consumed by the Evaluator.

    Setting an existing name silently replaces the earlier function.
    """

    def __init__(self):
        self._functions: dict[str, Callable[..., Any]] = {}

    def set_function(self, name: str, function: Callable[..., Any]):
        self._functions[name] = function

    def get(self, name: str) -> Callable[..., Any] | None:
        return self._functions.get(name)

    def names(self) -> list[str]:
        return list(self._functions)

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)


def spell_functions(magic: Magic,
                    output_fn: Callable[[str], None] = print) -> dict[str, Callable[..., Any]]:
    """Build the four named callables for one spell."""
    x = magic.name
    if not magic.always_def:
        return {
            x:             MagicFormula(x, magic, defensive=False),
            f"def_{x}":    MagicFormula(f"def_{x}", magic, defensive=True),
            f"t_{x}":      MagicTable(f"t_{x}", magic, defensive=False, output_fn=output_fn),
            f"t_def_{x}":  MagicTable(f"t_def_{x}", magic, defensive=True, output_fn=output_fn),
        }
    return {
        x:             MagicTable(x, magic, defensive=True, output_fn=output_fn),
        f"at_{x}":     MagicTable(f"at_{x}", magic, defensive=False, output_fn=output_fn),
        f"t_{x}":      MagicTable(f"t_{x}", magic, defensive=True, output_fn=output_fn),
        f"t_at_{x}":   MagicTable(f"t_at_{x}", magic, defensive=False, output_fn=output_fn),
    }


def register_magics(magics: list[Magic], registry: FunctionRegistry,
                    output_fn: Callable[[str], None] = print) -> FunctionRegistry:
    """Register every spell's functions in list order. Later names overwrite earlier ones."""
    for magic in magics:
        for name, function in spell_functions(magic, output_fn).items():
            registry.set_function(name, function)
    return registry
