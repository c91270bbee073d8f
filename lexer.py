import string

DIGITS = string.digits
LETTERS = string.ascii_letters + "_"
LETTERS_DIGITS = LETTERS + DIGITS

RESERVED = {
    "println": "PRINT",
    "while": "WHILE",
    "true": "TRUE",
    "false": "FALSE",
    "if": "IF",
    "else": "ELSE",
    "def": "DEF",
    "return": "RETURN",
    "var": "VAR",
}

SINGLE_CHAR = {
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "+": "PLUS",
    "-": "MINUS",
    "*": "STAR",
    "/": "SLASH",
    ";": "SEMI",
    ",": "COMMA",
}

# first char -> (kind alone, kind with trailing '=')
WITH_EQUALS = {
    "<": ("LT", "LTE"),
    ">": ("GT", "GTE"),
    "!": ("NOT", "NOTEQ"),
    "=": ("ERROR", "EQEQ"),
    ":": ("ERROR", "ASSIGN"),
}

REL_OPS = ("EQEQ", "NOTEQ", "LT", "LTE", "GT", "GTE")

WHITESPACE = " \t\r\n"


class Token:
    def __init__(self, type, lexeme, column=1):
        self.type = type
        self.lexeme = lexeme
        self.column = column

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.lexeme, self.column) == (other.type, other.lexeme, other.column)

    def __hash__(self):
        return hash((self.type, self.lexeme, self.column))

    def __repr__(self):
        return f"{self.type}({self.lexeme!r})"


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None

    @property
    def column(self):
        return self.pos + 1

    def advance(self):
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        nxt = self.pos + 1
        if nxt >= len(self.text):
            return None
        return self.text[nxt]

    def skip_whitespace(self):
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def read_identifier(self):
        start = self.pos
        while self.current_char is not None and self.current_char in LETTERS_DIGITS:
            self.advance()
        word = self.text[start:self.pos]
        return Token(RESERVED.get(word, "IDENT"), word, start + 1)

    def read_number(self):
        start = self.pos
        while self.current_char is not None and self.current_char in DIGITS:
            self.advance()

        # a fraction needs at least one digit after the dot
        nxt = self.peek()
        if self.current_char == "." and nxt is not None and nxt in DIGITS:
            self.advance()
            while self.current_char is not None and self.current_char in DIGITS:
                self.advance()

        return Token("NUMBER", self.text[start:self.pos], start + 1)

    def read_string(self):
        start = self.pos
        self.advance()  # opening quote
        chars = []
        while self.current_char is not None and self.current_char != '"':
            chars.append(self.current_char)
            self.advance()

        # unterminated strings run to the end of the line
        if self.current_char == '"':
            self.advance()
        return Token("STRING", "".join(chars), start + 1)

    def read_operator(self):
        start_col = self.column
        ch = self.current_char

        if ch in SINGLE_CHAR:
            self.advance()
            return Token(SINGLE_CHAR[ch], ch, start_col)

        if ch in WITH_EQUALS:
            alone, paired = WITH_EQUALS[ch]
            if self.peek() == "=":
                self.advance()
                self.advance()
                return Token(paired, ch + "=", start_col)
            self.advance()
            return Token(alone, ch, start_col)

        self.advance()
        return Token("ERROR", ch, start_col)

    def get_next_token(self):
        self.skip_whitespace()

        if self.current_char is None:
            return Token("EOF", "<eof>", self.column)

        if self.current_char in DIGITS:
            return self.read_number()

        if self.current_char in LETTERS:
            return self.read_identifier()

        if self.current_char == '"':
            return self.read_string()

        return self.read_operator()

    def tokenize(self):
        tokens = []
        while True:
            tok = self.get_next_token()
            tokens.append(tok)
            if tok.type == "EOF":
                return tokens


def tokenize(text):
    """Split one line of Brook source into tokens, always ending with EOF.

    Never raises: characters that start no token come back as ERROR tokens
    and are left for the parser to reject.
    """
    return Lexer(text).tokenize()
