"""
magicalc REPL
=============
Interactive calculator over the spells compiled from a definition file.

Usage:
    python repl.py                   # loads $MAGICALC_FILE or init.rpg
    python repl.py spells.rpg
    python repl.py spells.rpg --check
"""
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from magicalc.config import ReplConfig, load_config
from magicalc.evaluator import Evaluator, EvaluationError
from magicalc.formulas import FormulaError
from magicalc.interpreter import ParseError
from magicalc.loader import DefinitionFileError, process_file_to_magic
from magicalc.magic import Magic, describe_all
from magicalc.registry import FunctionRegistry, UsageError, register_magics


BANNER = r"""
╔══════════════════════════════════════════════════════════════╗
║                                                              ║
║     ✦ ─── MAGICALC ─── ✦                                     ║
║                                                              ║
║     Spell damage calculator                                  ║
║     Type 'help' for the function reference                   ║
║     Type 'exit' or Ctrl+C to quit                            ║
║                                                              ║
╚══════════════════════════════════════════════════════════════╝
"""

HELP_TEXT = """
╔══════════════════════════════════════════════════════════════╗
║                  SPELL FUNCTION REFERENCE                    ║
╠════════════════════╦═════════════════════════════════════════╣
║ X(acc, mana)       ║ Attack damage of spell X                ║
║ def_X(acc, mana)   ║ Defensive life of spell X               ║
║ t_X(s, e)          ║ Attack table, mana s..e                 ║
║ t_X(s, e, step)    ║ ... every `step` mana                   ║
║ t_X(s, e, step, a) ║ ... at accuracy a (default 10 + addon)  ║
║ t_def_X(...)       ║ Defense table                           ║
╠════════════════════╬═════════════════════════════════════════╣
║ always_def spells  ║ X, t_X → defense table                  ║
║                    ║ at_X, t_at_X → attack table             ║
╚════════════════════╩═════════════════════════════════════════╝

Examples:
  fire(12, 30)
  power = def_fire(10, 50) * 2
  t_fire(10, 50, 10)

Commands: help, spells, functions, env, log, clear, exit
"""


def load_session(filepath: str, output_fn=print) -> tuple[list[Magic], Evaluator]:
    """Compile the definition file and register its spells in a fresh Evaluator."""
    magics = process_file_to_magic(filepath)
    registry = register_magics(magics, FunctionRegistry(), output_fn=output_fn)
    return magics, Evaluator(registry)


def format_value(value) -> str:
    """Format a value for display."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, tuple):
        return "(" + ", ".join(format_value(v) for v in value) + ")"
    return str(value)


def eval_line(evaluator: Evaluator, line: str) -> None:
    """Evaluate one line and print its result or error."""
    try:
        result = evaluator.evaluate(line)
        if result is not None:
            print(f"  ⟹ {format_value(result)}")
    except UsageError as e:
        print(f"  ⚠ Usage: {e}")
    except FormulaError as e:
        print(f"  ⚠ Formula Error: {e}")
    except EvaluationError as e:
        print(f"  ⚠ Error: {e}")


def run_repl(config: ReplConfig) -> int:
    """Run the interactive REPL. Returns the process exit code."""
    try:
        magics, evaluator = load_session(config.definitions)
    except (DefinitionFileError, ParseError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if config.check_only:
        print(describe_all(magics))
        print(f"  ✔ {len(magics)} spell(s), {len(evaluator.registry)} function(s)")
        return 0

    if config.show_banner:
        print(BANNER)
    print(f"  Loaded {len(magics)} spell(s) from {config.definitions}")

    while True:
        try:
            line = input("  ✦⟩ ")
        except (EOFError, KeyboardInterrupt):
            print("\n  Goodbye.")
            return 0

        line = line.strip()
        if not line:
            continue

        command = line.lower()
        if command in ("exit", "quit"):
            print("  Goodbye.")
            return 0

        if command == "help":
            print(HELP_TEXT)
            continue

        if command == "spells":
            print(describe_all(magics))
            continue

        if command == "functions":
            for name in sorted(evaluator.registry.names()):
                print(f"    {name}")
            continue

        if command == "env":
            if evaluator.env:
                print("  ─── Variables ───")
                for name, value in evaluator.env.items():
                    print(f"    {name} = {format_value(value)}")
            else:
                print("  (no variables)")
            continue

        if command == "log":
            if evaluator.history:
                print("  ─── History ───")
                for entry in evaluator.history:
                    print(f"    {entry}")
            else:
                print("  (no history)")
            continue

        if command == "clear":
            evaluator.env.clear()
            evaluator.history.clear()
            print("  ∅ State cleared.")
            continue

        eval_line(evaluator, line)


def main(argv: list[str] | None = None) -> int:
    return run_repl(load_config(argv))


if __name__ == "__main__":
    sys.exit(main())
