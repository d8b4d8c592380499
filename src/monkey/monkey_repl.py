import io
import traceback

from monkey.monkey_ast import LetStatement, Program
from monkey.monkey_environment import Environment
from monkey.monkey_evaluator import evaluate
from monkey.monkey_parser import parse

PROMPT = ">> "
CONTINUATION_PROMPT = ".. "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_parse_errors(errors: list[str]) -> None:
    print("[parse error] >>>")
    for err in errors:
        print(f"\t{err}")


def print_env(env: Environment) -> None:
    bindings = env.bindings()
    if not bindings:
        print("[env] >>> (empty)")
        return
    for name, value in sorted(bindings.items()):
        print(f"{name:>12} = {value.inspect()}")


def ends_with_let(program: Program) -> bool:
    return bool(program.statements) and isinstance(program.statements[-1], LetStatement)


def read_source() -> str | None:
    """Read one entry, continuing over several lines while `{` is unbalanced.

    Returns None when the user asks to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(CONTINUATION_PROMPT if src_lines else PROMPT)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")
    env = Environment()

    while True:
        try:
            src = read_source()
            if src is None:
                print("Exiting Monkey REPL.")
                return
            if not src:
                continue
            if src == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            if src == "env":
                print_env(env)
                continue

            try:
                program, errors = parse(src)
                if errors:
                    print_parse_errors(errors)
                    continue
                if verbose:
                    print(f"[ast] >>> {program}")
                result = evaluate(program, env)
            except Exception:  # RecursionError from runaway recursion, mostly
                print_traceback()
                continue

            if not ends_with_let(program):
                print(result.inspect())

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Monkey REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
