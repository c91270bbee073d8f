class ASTNode:
    # Token that produced the node; used for diagnostics only.
    token = None


class Expression(ASTNode):
    pass


class Statement(ASTNode):
    pass


# ---------- EXPRESSIONS ----------

class Literal(Expression):
    def __init__(self, token, value):
        self.token = token
        self.value = value  # float | str | bool


class Identifier(Expression):
    def __init__(self, token):
        self.token = token
        self.name = token.lexeme


class Unary(Expression):
    def __init__(self, token, op, operand):
        self.token = token
        self.op = op          # "-" or "!"
        self.operand = operand


class Binary(Expression):
    def __init__(self, token, op, left, right):
        self.token = token
        self.op = op          # + - * /
        self.left = left
        self.right = right


class Relational(Expression):
    def __init__(self, token, op, left, right):
        self.token = token
        self.op = op          # == != < <= > >=
        self.left = left
        self.right = right


class Assign(Expression):
    def __init__(self, token, target, value):
        self.token = token
        self.target = target  # Identifier | Subscript
        self.value = value


class ListLiteral(Expression):
    def __init__(self, token, items):
        self.token = token
        self.items = items    # list[Expression]


class Subscript(Expression):
    def __init__(self, token, base, index):
        self.token = token
        self.base = base      # usually an Identifier
        self.index = index


class Call(Expression):
    def __init__(self, token, callee, args):
        self.token = token
        self.callee = callee  # usually an Identifier
        self.args = args      # list[Expression], evaluated left to right


# ---------- STATEMENTS ----------

class StatementList(Statement):
    def __init__(self, token, statements):
        self.token = token
        self.statements = statements


class Program(StatementList):
    # One parsed input line.
    pass


class ExprStatement(Statement):
    def __init__(self, token, expr):
        self.token = token
        self.expr = expr


class Print(Statement):
    def __init__(self, token, expr):
        self.token = token
        self.expr = expr


class VarDecl(Statement):
    def __init__(self, token, name, initializer=None):
        self.token = token
        self.name = name
        self.initializer = initializer  # Expression | None


class While(Statement):
    def __init__(self, token, condition, body):
        self.token = token
        self.condition = condition
        self.body = body                # StatementList


class If(Statement):
    def __init__(self, token, condition, then_block, else_block=None):
        self.token = token
        self.condition = condition
        self.then_block = then_block
        self.else_block = else_block    # None when there is no else, not an empty list


class FuncDef(Statement):
    def __init__(self, token, name, params, body):
        self.token = token
        self.name = name
        self.params = params            # list[VarDecl] without initializers
        self.body = body                # StatementList

    @property
    def param_names(self):
        return [p.name for p in self.params]


class Return(Statement):
    def __init__(self, token, value=None):
        self.token = token
        self.value = value              # Expression | None (returns nil)
