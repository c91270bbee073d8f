from ast_nodes import (
    Literal, Identifier, Unary, Binary, Relational, Assign, ListLiteral, Subscript, Call,
    StatementList, Program, ExprStatement, Print, VarDecl, While, If, FuncDef, Return,
)
from errors import BrookSyntaxError
from lexer import REL_OPS


class Parser:
    def __init__(self, tokens):
        if not tokens or tokens[-1].type != "EOF":
            raise ValueError("token sequence must end with EOF")
        self.tokens = tokens
        self.pos = 0
        self.current_token = tokens[0]

    def advance(self):
        # EOF is sticky
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        self.current_token = self.tokens[self.pos]

    # move to next token, but only if it matches what we expect
    def eat(self, token_type):
        tok = self.current_token
        if tok.type != token_type:
            self.error_here(f"Expected {token_type}")
        self.advance()
        return tok

    def error_here(self, message):
        tok = self.current_token
        if tok.type == "ERROR":
            raise BrookSyntaxError(f"Unrecognized character '{tok.lexeme}'", tok)
        raise BrookSyntaxError(f"{message}, got '{tok.lexeme}'", tok)

    # ---------- TOP LEVEL ----------
    def parse(self):
        start = self.current_token
        statements = self.statement_list()
        if self.current_token.type != "EOF":
            self.error_here("Unexpected token")
        return Program(start, statements)

    # statements up to '}' or end of input; ';' only separates
    def statement_list(self):
        statements = []
        while self.current_token.type not in ("RBRACE", "EOF"):
            if self.current_token.type == "SEMI":
                self.eat("SEMI")
                continue
            statements.append(self.statement())
        return statements

    def block(self):
        tok = self.eat("LBRACE")
        statements = self.statement_list()
        self.eat("RBRACE")
        return StatementList(tok, statements)

    # ---------- STATEMENTS ----------
    def statement(self):
        kind = self.current_token.type

        if kind == "IF":
            return self.if_statement()
        if kind == "WHILE":
            return self.while_statement()
        if kind == "DEF":
            return self.func_def()
        if kind == "VAR":
            return self.var_decl()
        if kind == "RETURN":
            return self.return_statement()
        if kind == "PRINT":
            tok = self.eat("PRINT")
            return Print(tok, self.expr())

        tok = self.current_token
        return ExprStatement(tok, self.expr())

    def if_statement(self):
        tok = self.eat("IF")
        self.eat("LPAREN")
        condition = self.expr()
        self.eat("RPAREN")
        then_block = self.block()

        else_block = None
        if self.current_token.type == "ELSE":
            self.eat("ELSE")
            else_block = self.block()
        return If(tok, condition, then_block, else_block)

    def while_statement(self):
        tok = self.eat("WHILE")
        self.eat("LPAREN")
        condition = self.expr()
        self.eat("RPAREN")
        body = self.block()
        return While(tok, condition, body)

    def func_def(self):
        tok = self.eat("DEF")
        name = self.eat("IDENT").lexeme
        self.eat("LPAREN")
        params = []
        if self.current_token.type != "RPAREN":
            params.append(self.param())
            while self.current_token.type == "COMMA":
                self.eat("COMMA")
                params.append(self.param())
        self.eat("RPAREN")
        body = self.block()
        return FuncDef(tok, name, params, body)

    # parameters reuse the var declaration node: x or var x
    def param(self):
        if self.current_token.type == "VAR":
            self.eat("VAR")
        name_tok = self.eat("IDENT")
        return VarDecl(name_tok, name_tok.lexeme)

    def var_decl(self):
        tok = self.eat("VAR")
        name = self.eat("IDENT").lexeme
        initializer = None
        if self.current_token.type == "ASSIGN":
            self.eat("ASSIGN")
            initializer = self.expr()
        return VarDecl(tok, name, initializer)

    def return_statement(self):
        tok = self.eat("RETURN")
        if self.current_token.type in ("SEMI", "RBRACE", "EOF"):
            return Return(tok, None)
        return Return(tok, self.expr())

    # ---------- EXPRESSIONS ----------

    # expr -> relop (':=' relop)?
    def expr(self):
        node = self.relop()
        if self.current_token.type == "ASSIGN":
            tok = self.current_token
            if not isinstance(node, (Identifier, Subscript)):
                raise BrookSyntaxError("Invalid assignment target", tok)
            self.eat("ASSIGN")
            node = Assign(tok, node, self.relop())
        return node

    # relop -> term (relop_operator term)*
    def relop(self):
        node = self.term()
        while self.current_token.type in REL_OPS:
            op_token = self.current_token
            self.eat(op_token.type)
            node = Relational(op_token, op_token.lexeme, node, self.term())
        return node

    # term -> factor ((+|-) factor)*
    def term(self):
        node = self.factor()
        while self.current_token.type in ("PLUS", "MINUS"):
            op_token = self.current_token
            self.eat(op_token.type)
            node = Binary(op_token, op_token.lexeme, node, self.factor())
        return node

    # factor -> unary ((*|/) unary)*
    def factor(self):
        node = self.unary()
        while self.current_token.type in ("STAR", "SLASH"):
            op_token = self.current_token
            self.eat(op_token.type)
            node = Binary(op_token, op_token.lexeme, node, self.unary())
        return node

    # unary -> (- unary) | (! unary) | val
    def unary(self):
        if self.current_token.type in ("MINUS", "NOT"):
            tok = self.current_token
            self.eat(tok.type)
            return Unary(tok, tok.lexeme, self.unary())
        return self.val()

    # val -> primary ('[' expr ']' | '(' args ')')*
    def val(self):
        node = self.primary()
        while self.current_token.type in ("LBRACKET", "LPAREN"):
            tok = self.current_token
            if tok.type == "LBRACKET":
                self.eat("LBRACKET")
                index = self.expr()
                self.eat("RBRACKET")
                node = Subscript(tok, node, index)
            else:
                self.eat("LPAREN")
                node = Call(tok, node, self.arg_list("RPAREN"))
        return node

    # primary -> NUMBER | IDENT | TRUE | FALSE | STRING | (expr) | [args]
    def primary(self):
        tok = self.current_token

        if tok.type == "NUMBER":
            self.eat("NUMBER")
            return Literal(tok, float(tok.lexeme))

        if tok.type == "STRING":
            self.eat("STRING")
            return Literal(tok, tok.lexeme)

        if tok.type in ("TRUE", "FALSE"):
            self.eat(tok.type)
            return Literal(tok, tok.type == "TRUE")

        if tok.type == "IDENT":
            self.eat("IDENT")
            return Identifier(tok)

        if tok.type == "LPAREN":
            self.eat("LPAREN")
            node = self.expr()
            self.eat("RPAREN")
            return node

        if tok.type == "LBRACKET":
            self.eat("LBRACKET")
            return ListLiteral(tok, self.arg_list("RBRACKET"))

        self.error_here("Expected an expression")

    # comma separated expressions up to and including the closing token
    def arg_list(self, closing):
        items = []
        if self.current_token.type != closing:
            items.append(self.expr())
            while self.current_token.type == "COMMA":
                self.eat("COMMA")
                items.append(self.expr())
        self.eat(closing)
        return items


def parse(tokens):
    try:
        return Parser(tokens).parse()
    except RecursionError:
        raise BrookSyntaxError("expression nested too deeply") from None
