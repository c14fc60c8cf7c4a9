from dataclasses import dataclass
import sys

from .debug import dump_table
from .shared import printf, printf_err
from .table import NotFound, Table, free_table, new_table


@dataclass(frozen=True)
class RunOk:
    pass


@dataclass(frozen=True)
class ScriptError:
    pass


@dataclass(frozen=True)
class ScriptAssertionError:
    pass


RunResult = RunOk | ScriptError | ScriptAssertionError


DEMO_SCRIPT = """
set name mei mei
set age 67
set city dubai
get name
get age
get city
expect name mei mei
expect age 67
expect city dubai
missing country

set name tole tole
get name
expect name tole tole

del age
missing age

set email vro@github.com
set phone 123-456-7890
set address 123 labubu st
get email
expect email vro@github.com

del city
del email
del phone
expect name tole tole
expect address 123 labubu st

del nonexistent
"""


def run_line(table: Table, line: str) -> RunResult:
    words = line.split()
    if not words or words[0].startswith("#"):
        return RunOk()

    match words:
        case ["set", key, *value] if value:
            table.insert(key, " ".join(value))

        case ["get", key]:
            found = table.search(key)
            if isinstance(found, NotFound):
                printf("{0:s}: (not found)\n", key)
            else:
                printf("{0:s}: {1!s}\n", key, found)

        case ["del", key]:
            table.delete(key)

        case ["expect", key, *value] if value:
            expected = " ".join(value)
            found = table.search(key)
            if found != expected:
                printf_err("expect {0:s}: want {1!r}, got {2!r}\n", key, expected, found)
                return ScriptAssertionError()

        case ["missing", key]:
            if table.contains(key):
                printf_err("missing {0:s}: key is present\n", key)
                return ScriptAssertionError()

        case ["dump"]:
            dump_table(table, "table")

        case _:
            printf_err("Unknown command '{0:s}'\n", line.strip())
            return ScriptError()

    return RunOk()


def run_source(table: Table, source: str) -> RunResult:
    for line in source.splitlines():
        result = run_line(table, line)
        if not isinstance(result, RunOk):
            return result
    return RunOk()


def demo() -> RunResult:
    table = new_table()
    result = run_source(table, DEMO_SCRIPT)
    free_table(table)

    if isinstance(result, RunOk):
        printf("All tests passed!\n")
    return result


def repl():
    table = new_table()
    while True:
        try:
            inpt = input()
        except EOFError:
            break
        run_line(table, inpt)
    free_table(table)


def exit_code(result: RunResult) -> int:
    if isinstance(result, ScriptError):
        return 65
    if isinstance(result, ScriptAssertionError):
        return 70
    return 0


def run_file(filepath: str):
    table = new_table()
    with open(filepath) as fp:
        result = run_source(table, fp.read())
    free_table(table)

    sys.exit(exit_code(result))


def main(argv: list[str] | None = None):
    args = sys.argv[1:] if argv is None else argv

    if len(args) == 0:
        repl()
    elif args == ["--demo"]:
        sys.exit(exit_code(demo()))
    elif len(args) == 1:
        run_file(args[0])
    else:
        printf("Usage: pyht [--demo | path]\n")
        sys.exit(64)


if __name__ == "__main__":
    main()
