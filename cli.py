import sys
import traceback

from errors import BrookError
from interpreter import Interpreter
from lexer import tokenize
from parser import parse


USAGE = """Usage:
  python cli.py tokens <file.brook>
  python cli.py parse <file.brook>
  python cli.py run <file.brook>
  python cli.py repl
  (optional) --ast to print each parsed line before running it
  (optional) --debug to show Python traceback"""

QUIT_WORDS = (":q", ":quit", "quit", "exit")


# Simple AST printer (so you can SEE what the parser built)
def ast_to_dict(node):
    if node is None:
        return None

    t = node.__class__.__name__
    d = {"type": t}

    if t in ("Program", "StatementList"):
        d["statements"] = [ast_to_dict(s) for s in node.statements]
    elif t in ("ExprStatement", "Print"):
        d["expr"] = ast_to_dict(node.expr)
    elif t == "VarDecl":
        d["name"] = node.name
        if node.initializer is not None:
            d["value"] = ast_to_dict(node.initializer)
    elif t == "While":
        d["condition"] = ast_to_dict(node.condition)
        d["body"] = ast_to_dict(node.body)
    elif t == "If":
        d["condition"] = ast_to_dict(node.condition)
        d["then_block"] = ast_to_dict(node.then_block)
        if node.else_block is not None:
            d["else_block"] = ast_to_dict(node.else_block)
    elif t == "FuncDef":
        d["name"] = node.name
        d["params"] = list(node.param_names)
        d["body"] = ast_to_dict(node.body)
    elif t == "Return":
        d["value"] = ast_to_dict(node.value)
    elif t in ("Literal", "Identifier"):
        d["token"] = node.token.lexeme
    elif t == "Unary":
        d["op"] = node.op
        d["operand"] = ast_to_dict(node.operand)
    elif t in ("Binary", "Relational"):
        d["op"] = node.op
        d["left"] = ast_to_dict(node.left)
        d["right"] = ast_to_dict(node.right)
    elif t == "Assign":
        d["target"] = ast_to_dict(node.target)
        d["value"] = ast_to_dict(node.value)
    elif t == "ListLiteral":
        d["items"] = [ast_to_dict(i) for i in node.items]
    elif t == "Subscript":
        d["base"] = ast_to_dict(node.base)
        d["index"] = ast_to_dict(node.index)
    elif t == "Call":
        d["callee"] = ast_to_dict(node.callee)
        d["args"] = [ast_to_dict(a) for a in node.args]
    else:
        d["raw"] = str(node)

    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def print_ast(program):
    print(pretty(ast_to_dict(program)))


def read_lines(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except OSError as e:
        print(f"Cannot read {path}: {e.strerror}")
        sys.exit(1)


def cmd_tokens(path):
    for number, line in enumerate(read_lines(path), start=1):
        for tok in tokenize(line):
            print(f"{number}:{tok.column} [ {tok.type}, {tok.lexeme} ]")


def cmd_parse(path):
    failed = False
    for number, line in enumerate(read_lines(path), start=1):
        if not line.strip():
            continue
        try:
            program = parse(tokenize(line))
        except BrookError as e:
            print(f"line {number}: {e}")
            failed = True
            continue
        print(f"line {number}:")
        print_ast(program)
    if failed:
        sys.exit(1)


def cmd_run(path, debug: bool = False, show_ast: bool = False):
    interp = Interpreter()
    on_parse = print_ast if show_ast else None
    failed = False

    # lines run one at a time against the same session, like the REPL
    for line in read_lines(path):
        if not line.strip():
            continue
        try:
            ok = interp.run_line(line, on_parse=on_parse)
        except Exception as e:
            if debug:
                traceback.print_exc()
            else:
                print(f"Internal error: {e}")
            ok = False
        failed = failed or not ok

    if failed:
        sys.exit(1)


def cmd_repl(debug: bool = False, show_ast: bool = False):
    interp = Interpreter()
    on_parse = print_ast if show_ast else None

    print("Brook REPL. Type :q to quit.")

    while True:
        try:
            line = input(" > ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if stripped in QUIT_WORDS:
            break
        if not stripped:
            continue

        try:
            interp.run_line(line, on_parse=on_parse)
        except Exception as e:
            # language errors are reported by run_line; this is a bug in Brook itself
            if debug:
                traceback.print_exc()
            else:
                print(f"Internal error: {e}")


def main():
    debug = False
    if "--debug" in sys.argv:
        debug = True
        sys.argv.remove("--debug")

    show_ast = False
    if "--ast" in sys.argv:
        show_ast = True
        sys.argv.remove("--ast")

    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    cmd = sys.argv[1]

    if cmd == "repl":
        if len(sys.argv) != 2:
            print("Usage:")
            print("  python cli.py repl")
            sys.exit(1)
        cmd_repl(debug=debug, show_ast=show_ast)
        return

    if len(sys.argv) != 3:
        print(USAGE)
        sys.exit(1)

    path = sys.argv[2]

    if cmd == "tokens":
        cmd_tokens(path)
    elif cmd == "parse":
        cmd_parse(path)
    elif cmd == "run":
        cmd_run(path, debug=debug, show_ast=show_ast)
    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
