import pytest

from ast_nodes import (
    Assign, Binary, Call, ExprStatement, FuncDef, Identifier, If, ListLiteral, Literal, Print,
    Program, Relational, Return, StatementList, Subscript, Unary, VarDecl, While,
)
from errors import BrookSyntaxError
from lexer import tokenize
from parser import Parser, parse


def parse_text(text):
    return parse(tokenize(text))


def only_expr(text):
    program = parse_text(text)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExprStatement)
    return stmt.expr


def shape(node):
    # compact tuple form so expected trees stay readable
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, Unary):
        return (node.op, shape(node.operand))
    if isinstance(node, (Binary, Relational)):
        return (node.op, shape(node.left), shape(node.right))
    if isinstance(node, Assign):
        return (":=", shape(node.target), shape(node.value))
    if isinstance(node, Subscript):
        return ("[]", shape(node.base), shape(node.index))
    if isinstance(node, Call):
        return ("call", shape(node.callee), [shape(a) for a in node.args])
    if isinstance(node, ListLiteral):
        return ("list", [shape(i) for i in node.items])
    raise AssertionError(f"unexpected node {node!r}")


class TestExpressions:
    def test_precedence(self):
        assert shape(only_expr("1 + 2 * 3")) == ("+", 1.0, ("*", 2.0, 3.0))
        assert shape(only_expr("(1 + 2) * 3")) == ("*", ("+", 1.0, 2.0), 3.0)

    def test_left_associative(self):
        assert shape(only_expr("8 - 4 - 2")) == ("-", ("-", 8.0, 4.0), 2.0)
        assert shape(only_expr("8 / 4 / 2")) == ("/", ("/", 8.0, 4.0), 2.0)

    def test_relational_binds_loosest_and_chains(self):
        assert shape(only_expr("1 + 1 < 3")) == ("<", ("+", 1.0, 1.0), 3.0)
        assert shape(only_expr("1 < 2 == true")) == ("==", ("<", 1.0, 2.0), True)

    def test_unary(self):
        assert shape(only_expr("- -x")) == ("-", ("-", "x"))
        assert shape(only_expr("-a * b")) == ("*", ("-", "a"), "b")
        assert shape(only_expr("!done")) == ("!", "done")

    def test_literals(self):
        assert shape(only_expr('"hi"')) == "hi"
        assert shape(only_expr("true")) is True
        assert shape(only_expr("false")) is False
        assert shape(only_expr("2.5")) == 2.5

    def test_list_literal(self):
        assert shape(only_expr("[1, [2], a]")) == ("list", [1.0, ("list", [2.0]), "a"])
        assert shape(only_expr("[]")) == ("list", [])

    def test_subscript_and_call_postfix(self):
        assert shape(only_expr("a[1 + 1]")) == ("[]", "a", ("+", 1.0, 1.0))
        assert shape(only_expr("m[0][1]")) == ("[]", ("[]", "m", 0.0), 1.0)
        assert shape(only_expr("f(1, x)")) == ("call", "f", [1.0, "x"])
        assert shape(only_expr("f()")) == ("call", "f", [])
        assert shape(only_expr("g(1)[0]")) == ("[]", ("call", "g", [1.0]), 0.0)

    def test_assignment(self):
        assert shape(only_expr("x := 1 + 2")) == (":=", "x", ("+", 1.0, 2.0))
        assert shape(only_expr("a[0] := 9")) == (":=", ("[]", "a", 0.0), 9.0)

    def test_assignment_is_not_chained(self):
        with pytest.raises(BrookSyntaxError):
            parse_text("a := b := 1")

    def test_invalid_assignment_target(self):
        with pytest.raises(BrookSyntaxError, match="Invalid assignment target"):
            parse_text("1 + 2 := 3")
        with pytest.raises(BrookSyntaxError, match="Invalid assignment target"):
            parse_text("f() := 3")

    def test_nodes_keep_their_token(self):
        expr = only_expr("a + b")
        assert expr.token.lexeme == "+"
        assert expr.left.token.lexeme == "a"


class TestStatements:
    def test_program_is_a_statement_list(self):
        program = parse_text("println 1; x := 2; var y")
        assert isinstance(program, Program)
        assert isinstance(program, StatementList)
        assert [type(s) for s in program.statements] == [Print, ExprStatement, VarDecl]

    def test_var_decl(self):
        decl = parse_text("var x := 5").statements[0]
        assert decl.name == "x"
        assert shape(decl.initializer) == 5.0

        bare = parse_text("var y;").statements[0]
        assert bare.name == "y"
        assert bare.initializer is None

    def test_while(self):
        loop = parse_text("while (i < 3) { println i; i := i + 1; }").statements[0]
        assert isinstance(loop, While)
        assert shape(loop.condition) == ("<", "i", 3.0)
        assert [type(s) for s in loop.body.statements] == [Print, ExprStatement]

    def test_if_without_else_has_no_fail_branch(self):
        stmt = parse_text("if (x) { println 1; }").statements[0]
        assert isinstance(stmt, If)
        assert stmt.else_block is None

    def test_if_with_empty_else(self):
        stmt = parse_text("if (x) { println 1; } else { }").statements[0]
        assert stmt.else_block is not None
        assert stmt.else_block.statements == []

    def test_func_def(self):
        stmt = parse_text("def add(a, var b) { return a + b; }").statements[0]
        assert isinstance(stmt, FuncDef)
        assert stmt.name == "add"
        assert all(isinstance(p, VarDecl) for p in stmt.params)
        assert stmt.param_names == ["a", "b"]
        ret = stmt.body.statements[0]
        assert isinstance(ret, Return)
        assert shape(ret.value) == ("+", "a", "b")

    def test_func_def_without_params(self):
        stmt = parse_text("def f() { return; }").statements[0]
        assert stmt.params == []
        assert stmt.body.statements[0].value is None

    def test_statements_after_block_need_no_semicolon(self):
        program = parse_text("def f(x){ return x + 1; } println f(4);")
        assert [type(s) for s in program.statements] == [FuncDef, Print]

    def test_extra_semicolons(self):
        assert parse_text(";;println 1;;").statements[0].expr.value == 1.0
        assert parse_text("").statements == []


class TestErrors:
    def test_missing_token(self):
        with pytest.raises(BrookSyntaxError, match="Expected RPAREN") as info:
            parse_text("println (1 + 2;")
        assert info.value.token.lexeme == ";"

    def test_error_token_is_reported(self):
        with pytest.raises(BrookSyntaxError, match="Unrecognized character '='"):
            parse_text("x = 1")
        with pytest.raises(BrookSyntaxError, match="Unrecognized character '@'"):
            parse_text("println @")

    def test_unbalanced_brace(self):
        with pytest.raises(BrookSyntaxError):
            parse_text("println 1; }")
        with pytest.raises(BrookSyntaxError, match="Expected RBRACE"):
            parse_text("while (true) { println 1;")

    def test_missing_expression(self):
        with pytest.raises(BrookSyntaxError, match="Expected an expression"):
            parse_text("println ;")

    def test_message_has_column(self):
        with pytest.raises(BrookSyntaxError) as info:
            parse_text("var 3")
        assert str(info.value) == "Syntax error: Expected IDENT, got '3' at col 5"

    def test_tokens_must_end_with_eof(self):
        with pytest.raises(ValueError):
            Parser([])

    def test_deep_nesting_is_a_syntax_error(self):
        with pytest.raises(BrookSyntaxError, match="nested too deeply"):
            parse_text("println " + "(" * 2000 + "1" + ")" * 2000)
