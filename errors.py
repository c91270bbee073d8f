class BrookError(Exception):
    kind = "Error"

    def __init__(self, message: str, token=None):
        super().__init__(message)
        self.message = message
        self.token = token

    def at(self, token):
        # keep the innermost location if one is already set
        if self.token is None:
            self.token = token
        return self

    def location(self) -> str:
        if self.token is None:
            return ""
        return f" at col {self.token.column}"

    def format(self, indent: str = "") -> str:
        return f"{indent}{self.kind}: {self.message}{self.location()}"

    def __str__(self) -> str:
        return self.format()


class BrookSyntaxError(BrookError):
    kind = "Syntax error"


class BrookRuntimeError(BrookError):
    kind = "Runtime error"

    def __init__(self, message: str, token=None, frames=None):
        super().__init__(message, token)
        self.frames = frames or []  # function names, most recent first

    def format(self, indent: str = "") -> str:
        lines = [super().format(indent)]
        for name in self.frames:
            lines.append(f"{indent}  at func {name}")
        return "\n".join(lines)
