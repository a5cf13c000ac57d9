"""Checking, printing and rewriting of lambda-calculus programs."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import TextIO

from lambdacheck.hashmap import MIN_LOAD_THRESHOLD
from lambdacheck.symbols import ScopeStack, SymbolTable
from lambdacheck.syntax import (
    Abstraction,
    Application,
    Expression,
    Program,
    Variable,
)

__all__ = ["check", "format_tree", "print_tree", "transform", "error_underline"]

_RED = "\033[31m"
_RESET = "\033[0m"


def check(program: Program, table_size: int = 32, stream: TextIO | None = None) -> SymbolTable:
    """Check every statement and return the table of top-level bindings.

    Rebound names and identifiers that are neither bound by an enclosing
    abstraction nor declared at top level are reported on ``stream``
    (standard error by default), with the offending source underlined.
    """
    out = sys.stderr if stream is None else stream
    table = SymbolTable(table_size, MIN_LOAD_THRESHOLD)
    scope = ScopeStack()
    for statement in program:
        token = statement.name.token
        if token in table:
            print(
                f"[CHECKER]: reassigning expression to const variable {token.text} "
                f"in file {program.filename} at {statement.first_row}",
                file=out,
            )
            error_underline(
                program.filename, statement.first_row,
                statement.name.first_col, statement.name.last_col, out,
            )
        table.insert(statement)
        _check_expression(statement.expr, table, scope, program.filename, out)
        scope.clear()
    return table


def _check_expression(
    expr: Expression, table: SymbolTable, scope: ScopeStack, filename: str, out: TextIO
) -> bool:
    if isinstance(expr, Variable):
        token = expr.token
        found = token in scope or token in table
        if not found:
            print(
                f"[CHECKER]: non declared identifier used {token.text} "
                f"in file {filename} at {token.row}",
                file=out,
            )
            error_underline(filename, token.row, token.first_col, token.last_col, out)
        return found

    if isinstance(expr, Abstraction):
        params = list(expr.params)
        for token in params:
            scope.push(token)
        found = _check_expression(expr.body, table, scope, filename, out)
        for _ in params:
            scope.pop()
        return found

    left, right = expr.left, expr.right
    if isinstance(left, Abstraction):
        scope.push(None)
    left_ok = _check_expression(left, table, scope, filename, out)
    if isinstance(left, Abstraction) and not isinstance(right, Abstraction):
        scope.pop()
    right_ok = _check_expression(right, table, scope, filename, out)
    if isinstance(right, Abstraction):
        scope.pop()
    return left_ok and right_ok


def _tree_lines(expr: Expression, flags: list[bool]) -> Iterator[str]:
    prefix = "".join("    " if last else "│   " for last in flags[:-1])
    head = f"{prefix}{'└──' if flags[-1] else '├──'} "
    if isinstance(expr, Application):
        yield head + "@"
        yield from _tree_lines(expr.left, flags + [False])
        yield from _tree_lines(expr.right, flags + [True])
    elif isinstance(expr, Abstraction):
        yield head + "λ" + ",".join(token.text for token in expr.params)
        yield from _tree_lines(expr.body, flags + [True])
    else:
        yield head + expr.token.text


def format_tree(program: Program) -> str:
    """Render every statement as its name followed by a box-drawn tree."""
    lines: list[str] = []
    for statement in program:
        lines.append(statement.name.token.text)
        lines.extend(_tree_lines(statement.expr, [True]))
    return "".join(line + "\n" for line in lines)


def print_tree(program: Program, file: TextIO | None = None) -> None:
    """Write :func:`format_tree` of ``program`` to ``file`` (standard output by default)."""
    (sys.stdout if file is None else file).write(format_tree(program))


def transform(program: Program) -> None:
    """Split every multi-parameter abstraction into nested one-parameter ones, in place."""
    for statement in program:
        _transform(statement.expr)


def _transform(expr: Expression) -> None:
    if isinstance(expr, Application):
        _transform(expr.left)
        _transform(expr.right)
    elif isinstance(expr, Abstraction):
        rest = expr.params.next
        expr.params.next = None
        while rest is not None:
            following = rest.next
            rest.next = None
            expr.body = Abstraction(
                rest, expr.body,
                rest.first_row, rest.first_col, rest.last_row, rest.last_col,
            )
            rest = following
        _transform(expr.body)


def error_underline(
    filename: str, row: int, first_col: int, last_col: int, stream: TextIO | None = None
) -> None:
    """Echo line ``row`` of ``filename`` and underline columns ``first_col``..``last_col``."""
    out = sys.stderr if stream is None else stream
    line = ""
    try:
        with open(filename, encoding="utf-8", errors="replace", newline="") as handle:
            for number, line in enumerate(handle, start=1):
                if number == row:
                    break
    except OSError:
        print(f"Error: Could not access or find the source file: {filename}", file=out)
        return
    width = last_col - first_col + 1
    out.write(line)
    out.write(" " * max(first_col - 1, 0) + _RED + "^" + "~" * max(width - 1, 0) + _RESET + "\n")