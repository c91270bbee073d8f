"""Runtime values for Brook.

Values are plain Python objects:

    Number   -> float
    String   -> str
    Bool     -> bool
    Nil      -> None
    List     -> list      (shared: assignment copies the reference)
    Function -> Function  (shared reference to the defining FuncDef)

Helpers here raise BrookRuntimeError (without a token) for operations the
language rejects; the interpreter attaches the failing node's token.
"""

import math

from errors import BrookRuntimeError

NUMBER = "number"
STRING = "string"
BOOL = "bool"
NIL = "nil"
FUNCTION = "function"
LIST = "list"

# tag order, used when both sides are nil
KIND_ORDER = (NUMBER, STRING, BOOL, FUNCTION, LIST, NIL)


class Function:
    def __init__(self, definition):
        self.definition = definition  # FuncDef node; outlives the line that defined it

    @property
    def name(self):
        return self.definition.name

    @property
    def param_names(self):
        return self.definition.param_names

    @property
    def body(self):
        return self.definition.body

    def __repr__(self):
        return f"<Function {self.name}({', '.join(self.param_names)})>"


def kind_of(value):
    # bool before float: bool is an int subclass
    if value is None:
        return NIL
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, float):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, list):
        return LIST
    if isinstance(value, Function):
        return FUNCTION
    raise TypeError(f"not a Brook value: {value!r}")


def format_number(n: float) -> str:
    # %g with six significant digits, like a default C++ ostream;
    # longer numbers are rounded in the output only
    return f"{n:g}"


def render(value) -> str:
    kind = kind_of(value)
    if kind == NUMBER:
        return format_number(value)
    if kind == BOOL:
        return "true" if value else "false"
    if kind == STRING:
        return value
    if kind == NIL:
        return "nil"
    if kind == FUNCTION:
        return "(func)"
    items = " ".join(render(v) for v in value)
    if items:
        return f"list, size={len(value)}, {{ {items} }}"
    return f"list, size={len(value)}, {{ }}"


def is_truthy(value) -> bool:
    kind = kind_of(value)
    if kind == BOOL:
        return value
    if kind == NIL:
        return False
    if kind == NUMBER:
        return value != 0
    if kind == STRING:
        return value != ""
    return True


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _require_numbers(op, a, b):
    if kind_of(a) != NUMBER or kind_of(b) != NUMBER:
        raise BrookRuntimeError(f"operands of '{op}' must be numbers, got {kind_of(a)} and {kind_of(b)}")


def arithmetic(op: str, a, b):
    _require_numbers(op, a, b)
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return _divide(a, b)
    raise BrookRuntimeError(f"unknown arithmetic operator: {op}")


def negate(value):
    if kind_of(value) != NUMBER:
        raise BrookRuntimeError(f"operand of '-' must be a number, got {kind_of(value)}")
    return -value


def compare(op: str, a, b) -> bool:
    left, right = kind_of(a), kind_of(b)
    if left != right:
        raise BrookRuntimeError(f"cannot compare {left} with {right}")

    if left == NIL:
        # nil only ever meets nil here, so compare the tags themselves
        a = b = KIND_ORDER.index(NIL)
    elif left in (LIST, FUNCTION):
        if op == "==":
            return a is b
        if op == "!=":
            return a is not b
        raise BrookRuntimeError(f"cannot order {left} values with '{op}'")

    if op == "==":
        return a == b
    if op == "!=":
        return a != b
    if op == "<":
        return a < b
    if op == "<=":
        return a <= b
    if op == ">":
        return a > b
    if op == ">=":
        return a >= b
    raise BrookRuntimeError(f"unknown relational operator: {op}")


def list_index(items, index) -> int:
    """Validate a subscript and return it as a position in ``items``.

    Numbers are truncated toward zero. Anything outside ``0 <= i < len``
    is an error; negative indexes do not count from the end.
    """
    if kind_of(items) != LIST:
        raise BrookRuntimeError(f"cannot subscript a {kind_of(items)}")
    if kind_of(index) != NUMBER:
        raise BrookRuntimeError(f"list index must be a number, got {kind_of(index)}")
    if not math.isfinite(index):
        raise BrookRuntimeError(f"list index out of range: {format_number(index)}")
    position = int(index)
    if position < 0 or position >= len(items):
        raise BrookRuntimeError(f"list index out of range: {position} (size {len(items)})")
    return position
