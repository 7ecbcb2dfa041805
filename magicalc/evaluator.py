"""
Expression Evaluator
====================
Evaluates one calculator line against a FunctionRegistry and a variable
environment. Lines are parsed with Python's `ast` module and walked by a
small whitelist of node handlers; anything outside it is rejected.

Supported:
  - int, float and bool literals, tuples
  - arithmetic  + - * / // % **   and unary + - not
  - comparisons, and / or
  - variables and `name = expression`
  - calls into the registry: fire(12, 30), t_fire(1, 10, 2)
"""
import ast
import operator
from typing import Any, Callable

from .magic import MagicError
from .registry import FunctionRegistry


class EvaluationError(MagicError):
    """The line could not be evaluated."""
    pass


BINARY_OPS: dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

UNARY_OPS: dict[type, Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Not: operator.not_,
}

COMPARE_OPS: dict[type, Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
}

LITERAL_TYPES = (bool, int, float)


class Evaluator:
    """
    Calculator over registered spell functions.

    Usage:
        evaluator = Evaluator(registry)
        evaluator.evaluate("fire(12, 30) * 2")
    """

    def __init__(self, registry: FunctionRegistry | None = None):
        self.registry = registry if registry is not None else FunctionRegistry()
        self.env: dict[str, Any] = {}
        self.history: list[str] = []

    def evaluate(self, line: str) -> Any:
        """Evaluate one line. Assignments return None."""
        line = line.strip()
        try:
            tree = ast.parse(line, mode="exec")
        except SyntaxError as e:
            raise EvaluationError(f"Invalid expression: {e.msg}") from None
        except (RecursionError, MemoryError):
            raise EvaluationError("Expression is nested too deeply") from None
        if len(tree.body) != 1:
            raise EvaluationError("Expected exactly one expression")

        try:
            result = self._statement(tree.body[0])
        except RecursionError:
            raise EvaluationError("Expression is nested too deeply") from None
        self.history.append(line)
        return result

    def _statement(self, node: ast.stmt) -> Any:
        if isinstance(node, ast.Expr):
            return self.execute(node.value)
        if isinstance(node, ast.Assign):
            if len(node.targets) != 1 or not isinstance(node.targets[0], ast.Name):
                raise EvaluationError("Only simple assignment 'name = expression' is supported")
            target = node.targets[0].id
            if target in self.registry:
                raise EvaluationError(f"'{target}' is a spell function and cannot be reassigned")
            self.env[target] = self.execute(node.value)
            return None
        raise EvaluationError(f"Unsupported statement: {type(node).__name__}")

    def execute(self, node: ast.AST) -> Any:
        """Evaluate an expression node and return the result."""
        method = f"_eval_{type(node).__name__.lower()}"
        handler = getattr(self, method, None)
        if handler is None:
            raise EvaluationError(f"Unsupported syntax: {type(node).__name__}")
        return handler(node)

    # ─────────────────────────────────────────────────────────
    #  Node Handlers
    # ─────────────────────────────────────────────────────────

    def _eval_constant(self, node: ast.Constant) -> Any:
        if not isinstance(node.value, LITERAL_TYPES):
            raise EvaluationError(f"Unsupported literal: {node.value!r}")
        return node.value

    def _eval_name(self, node: ast.Name) -> Any:
        if node.id == "true":
            return True
        if node.id == "false":
            return False
        if node.id in self.env:
            return self.env[node.id]
        if node.id in self.registry:
            raise EvaluationError(f"'{node.id}' is a function; call it with arguments")
        raise EvaluationError(f"Undefined variable: '{node.id}'")

    def _eval_tuple(self, node: ast.Tuple) -> tuple:
        return tuple(self.execute(el) for el in node.elts)

    def _eval_binop(self, node: ast.BinOp) -> Any:
        op = BINARY_OPS.get(type(node.op))
        if op is None:
            raise EvaluationError(f"Unsupported operator: {type(node.op).__name__}")
        left, right = self.execute(node.left), self.execute(node.right)
        try:
            return op(left, right)
        except (ArithmeticError, TypeError) as e:
            raise EvaluationError(str(e)) from None

    def _eval_unaryop(self, node: ast.UnaryOp) -> Any:
        op = UNARY_OPS.get(type(node.op))
        if op is None:
            raise EvaluationError(f"Unsupported operator: {type(node.op).__name__}")
        try:
            return op(self.execute(node.operand))
        except TypeError as e:
            raise EvaluationError(str(e)) from None

    def _eval_boolop(self, node: ast.BoolOp) -> Any:
        is_and = isinstance(node.op, ast.And)
        value = None
        for operand in node.values:
            value = self.execute(operand)
            if bool(value) != is_and:
                return value
        return value

    def _eval_compare(self, node: ast.Compare) -> bool:
        left = self.execute(node.left)
        for op_node, comparator in zip(node.ops, node.comparators):
            op = COMPARE_OPS.get(type(op_node))
            if op is None:
                raise EvaluationError(f"Unsupported comparison: {type(op_node).__name__}")
            right = self.execute(comparator)
            try:
                if not op(left, right):
                    return False
            except TypeError as e:
                raise EvaluationError(str(e)) from None
            left = right
        return True

    def _eval_call(self, node: ast.Call) -> Any:
        if not isinstance(node.func, ast.Name):
            raise EvaluationError("Only named functions can be called")
        if node.keywords:
            raise EvaluationError("Keyword arguments are not supported")
        function = self.registry.get(node.func.id)
        if function is None:
            raise EvaluationError(f"Unknown function: {node.func.id}")
        args = [self.execute(a) for a in node.args]
        try:
            return function(*args)
        except OverflowError as e:
            raise EvaluationError(f"{node.func.id}: {e}") from None
