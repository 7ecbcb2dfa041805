# magicalc: spell definition compiler and damage calculator
"""
magicalc: compiles a spell definition file into named calculator functions.
"""
from .magic import Magic, MagicError, MagicRank, MagicType, describe_all
from .lexer import Lexer, Token, TokenType
from .interpreter import Interpreter, ParseError, ParseErrorKind, compile_source
from .formulas import (
    FormulaError, MULTIPLIERS,
    multiplier, total_damage, accuracy_factor, effective_damage, defense_life,
)
from .registry import (
    FunctionRegistry, MagicFormula, MagicTable, UsageError,
    register_magics, spell_functions,
)
from .loader import DefinitionFileError, load_file, process_file_to_magic
from .evaluator import Evaluator, EvaluationError
from .tables import render_table

__version__ = "0.1.0"
__all__ = [
    "Magic", "MagicError", "MagicRank", "MagicType", "describe_all",
    "Lexer", "Token", "TokenType",
    "Interpreter", "ParseError", "ParseErrorKind", "compile_source",
    "FormulaError", "MULTIPLIERS",
    "multiplier", "total_damage", "accuracy_factor", "effective_damage", "defense_life",
    "FunctionRegistry", "MagicFormula", "MagicTable", "UsageError",
    "register_magics", "spell_functions",
    "DefinitionFileError", "load_file", "process_file_to_magic",
    "Evaluator", "EvaluationError",
    "render_table",
]
