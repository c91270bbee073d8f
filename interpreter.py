import sys

from ast_nodes import (
    Literal, Identifier, Unary, Binary, Relational, Assign, ListLiteral, Subscript, Call,
    StatementList, ExprStatement, Print, VarDecl, While, If, FuncDef, Return,
)
from errors import BrookError, BrookRuntimeError
from lexer import tokenize
from parser import parse
from values import FUNCTION, Function, arithmetic, compare, is_truthy, kind_of, list_index, negate, render


class Environment:
    """Stack of name -> value scopes. scopes[0] is the global scope."""

    def __init__(self):
        self.scopes = [{}]

    @property
    def globals(self):
        return self.scopes[0]

    @property
    def depth(self):
        return len(self.scopes)

    def push_scope(self):
        self.scopes.append({})

    def pop_scope(self):
        if len(self.scopes) > 1:
            self.scopes.pop()

    def unwind(self):
        del self.scopes[1:]

    def define(self, name, value):
        self.scopes[-1][name] = value

    def define_global(self, name, value):
        self.scopes[0][name] = value

    def find_scope(self, name):
        # innermost first, down to the globals
        for scope in reversed(self.scopes):
            if name in scope:
                return scope
        return None

    def lookup(self, name):
        scope = self.find_scope(name)
        if scope is None:
            raise KeyError(name)
        return scope[name]

    def assign(self, name, value):
        # writes go to the innermost scope; only lookups fall outward
        self.scopes[-1][name] = value

    def __contains__(self, name):
        return self.find_scope(name) is not None


class Returning:
    # Signal from a statement: stop the enclosing blocks, hand value to the caller.
    def __init__(self, value):
        self.value = value


class Interpreter:
    STACK_CAPACITY = 31337
    MAX_CALL_DEPTH = 100

    def __init__(self, out=None, max_call_depth=None, max_steps=None, stack_capacity=None):
        self.out = out  # None -> sys.stdout at write time
        self.max_call_depth = self.MAX_CALL_DEPTH if max_call_depth is None else max_call_depth
        self.max_steps = max_steps  # set to an int to guard against infinite loops
        self.stack_capacity = self.STACK_CAPACITY if stack_capacity is None else stack_capacity

        self.env = Environment()   # lives for the whole session
        self.stack = []            # operand stack, empty between lines
        self.call_stack = []       # names of active functions
        self.steps = 0

    # ---------- OUTPUT ----------
    def write(self, text):
        print(text, file=self.out or sys.stdout)

    def report(self, message, token=None):
        # non-fatal diagnostic; evaluation carries on
        self.write(BrookRuntimeError(message, token).format())

    # ---------- OPERAND STACK ----------
    def push(self, value):
        if len(self.stack) >= self.stack_capacity:
            raise BrookRuntimeError(f"operand stack overflow (capacity {self.stack_capacity})")
        self.stack.append(value)

    def pop(self):
        if not self.stack:
            self.report("stack underflow (using nil)")
            return None
        return self.stack.pop()

    # ---------- PIPELINE ----------
    def run_line(self, text, on_parse=None):
        """Tokenize, parse and execute one line of source.

        Errors are printed, never raised, so a REPL can keep going. Returns
        True when the whole line ran, False when it was rejected or aborted.
        """
        try:
            program = parse(tokenize(text))
            if on_parse is not None:
                on_parse(program)
            self.execute(program)
        except BrookError as e:
            self.write(e.format())
            return False
        return True

    def execute(self, program):
        self.steps = 0
        try:
            self.execute_block(program)
        except RecursionError:
            raise BrookRuntimeError("maximum recursion depth exceeded") from None
        finally:
            # an aborted line must not leak operands or scopes into the next one
            self.stack.clear()
            self.call_stack.clear()
            self.env.unwind()

    # ---------- STATEMENTS ----------
    def execute_block(self, block):
        for stmt in block.statements:
            signal = self.execute_statement(stmt)
            if signal is not None:
                return signal
        return None

    def execute_statement(self, node):
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise BrookRuntimeError("Step limit exceeded (possible infinite loop)", node.token)

        match node:
            case StatementList():
                return self.execute_block(node)

            case ExprStatement():
                self.evaluate(node.expr)
                self.pop()

            case Print():
                self.evaluate(node.expr)
                self.write(render(self.pop()))

            case VarDecl():
                value = None
                if node.initializer is not None:
                    self.evaluate(node.initializer)
                    value = self.pop()
                self.env.define(node.name, value)

            case While():
                while True:
                    self.evaluate(node.condition)
                    if not is_truthy(self.pop()):
                        break
                    signal = self.execute_block(node.body)
                    if signal is not None:
                        return signal

            case If():
                self.evaluate(node.condition)
                if is_truthy(self.pop()):
                    return self.execute_block(node.then_block)
                if node.else_block is not None:
                    return self.execute_block(node.else_block)

            case FuncDef():
                self.env.define_global(node.name, Function(node))

            case Return():
                value = None
                if node.value is not None:
                    self.evaluate(node.value)
                    value = self.pop()
                return Returning(value)

            case _:
                raise BrookRuntimeError(f"cannot execute {type(node).__name__}", node.token)

        return None

    # ---------- EXPRESSIONS ----------
    def evaluate(self, node):
        # every expression leaves exactly one value on the operand stack
        match node:
            case Literal():
                self.push(node.value)

            case Identifier():
                self.push(self.lookup(node))

            case Unary():
                self.evaluate(node.operand)
                operand = self.pop()
                if node.op == "-":
                    self.push(self.checked(node, negate, operand))
                else:
                    self.push(not is_truthy(operand))

            case Binary():
                self.evaluate(node.left)
                self.evaluate(node.right)
                right = self.pop()
                left = self.pop()
                self.push(self.checked(node, arithmetic, node.op, left, right))

            case Relational():
                self.evaluate(node.left)
                self.evaluate(node.right)
                right = self.pop()
                left = self.pop()
                self.push(self.checked(node, compare, node.op, left, right))

            case Assign():
                self.push(self.assign(node))

            case ListLiteral():
                for item in node.items:
                    self.evaluate(item)
                items = [self.pop() for _ in node.items]
                items.reverse()
                self.push(items)

            case Subscript():
                self.evaluate(node.base)
                self.evaluate(node.index)
                index = self.pop()
                items = self.pop()
                position = self.checked(node, list_index, items, index)
                self.push(items[position])

            case Call():
                self.push(self.call(node))

            case _:
                raise BrookRuntimeError(f"cannot evaluate {type(node).__name__}", node.token)

    def checked(self, node, operation, *args):
        try:
            return operation(*args)
        except BrookRuntimeError as e:
            raise e.at(node.token)

    def lookup(self, node):
        try:
            return self.env.lookup(node.name)
        except KeyError:
            self.report(f"undefined name '{node.name}' (using nil)", node.token)
            return None

    def assign(self, node):
        target = node.target
        if isinstance(target, Identifier):
            self.evaluate(node.value)
            value = self.pop()
            self.env.assign(target.name, value)
            return value

        # subscript target: the list is shared, so every alias sees the store
        self.evaluate(target.base)
        self.evaluate(target.index)
        self.evaluate(node.value)
        value = self.pop()
        index = self.pop()
        items = self.pop()
        position = self.checked(target, list_index, items, index)
        items[position] = value
        return value

    def call(self, node):
        self.evaluate(node.callee)
        callee = self.pop()
        if kind_of(callee) != FUNCTION:
            raise BrookRuntimeError(f"cannot call a {kind_of(callee)} value", node.token)

        for arg in node.args:
            self.evaluate(arg)
        args = [self.pop() for _ in node.args]
        args.reverse()
        return self.call_function(callee, args, node.token)

    def call_function(self, function, args, token=None):
        if len(self.call_stack) >= self.max_call_depth:
            raise BrookRuntimeError(f"Maximum call depth exceeded ({self.max_call_depth})", token)

        self.env.push_scope()
        self.call_stack.append(function.name)
        try:
            # extra arguments or parameters are ignored
            for name, value in zip(function.param_names, args):
                self.env.define(name, value)
            signal = self.execute_block(function.body)
        except BrookRuntimeError as e:
            e.frames.append(function.name)
            raise
        finally:
            self.call_stack.pop()
            self.env.pop_scope()

        if signal is None:
            return None
        return signal.value
