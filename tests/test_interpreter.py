import io

from lambdacheck.interpreter import (
    check,
    error_underline,
    format_tree,
    print_tree,
    transform,
)
from lambdacheck.syntax import (
    Abstraction,
    Application,
    Identifier,
    Program,
    Statement,
    Token,
    Variable,
)


def tok(text, row=1, col=1):
    return Token(text, row, col, col + len(text) - 1)


def ident(*names, row=1):
    node = None
    for name in reversed(names):
        node = Identifier(tok(name, row), node)
    return node


def var(name, row=1):
    return Variable.from_identifier(ident(name, row=row))


def lam(names, body):
    return Abstraction(ident(*names), body)


def stmt(name, expr, row=1):
    return Statement(ident(name, row=row), expr, row, 1, row, 1)


def run_check(program):
    stream = io.StringIO()
    table = check(program, 32, stream)
    return table, stream.getvalue()


def test_check_clean_program(tmp_path):
    source = tmp_path / "ok.ld"
    source.write_text("id = \\x.x\nk = \\x,y.x\n")
    program = Program(str(source), [
        stmt("id", lam(["x"], var("x")), 1),
        stmt("k", lam(["x", "y"], var("x")), 2),
    ])
    table, output = run_check(program)
    assert output == ""
    assert len(table) == 2
    assert table.lookup(tok("k")) is program.statements[1]


def test_check_reports_undeclared_identifier(tmp_path):
    source = tmp_path / "bad.ld"
    source.write_text("g = \\x.y\n")
    program = Program(str(source), [stmt("g", lam(["x"], var("y")))])
    table, output = run_check(program)
    assert f"[CHECKER]: non declared identifier used y in file {source} at 1" in output
    assert tok("g") in table


def test_check_reports_reassignment(tmp_path):
    source = tmp_path / "re.ld"
    source.write_text("a = \\x.x\na = \\y.y\n")
    program = Program(str(source), [
        stmt("a", lam(["x"], var("x")), 1),
        stmt("a", lam(["y"], var("y")), 2),
    ])
    table, output = run_check(program)
    assert "reassigning expression to const variable a" in output
    assert f"in file {source} at 2" in output
    assert table.lookup(tok("a")) is program.statements[1]


def test_check_allows_self_reference_and_earlier_names():
    program = Program("missing.ld", [
        stmt("f", var("f")),
        stmt("g", Application(var("f"), var("g"))),
    ])
    _, output = run_check(program)
    assert output == ""


def test_bound_name_does_not_escape_applied_abstraction():
    program = Program("missing.ld", [
        stmt("h", Application(lam(["x"], var("x")), var("x"))),
    ])
    _, output = run_check(program)
    assert "non declared identifier used x" in output
    assert "Error: Could not access or find the source file: missing.ld" in output


def test_error_underline_marks_columns(tmp_path):
    source = tmp_path / "u.ld"
    source.write_text("abc\nhello world\n")
    stream = io.StringIO()
    error_underline(str(source), 2, 7, 11, stream)
    assert stream.getvalue() == "hello world\n      \033[31m^~~~~\033[0m\n"


def test_error_underline_missing_file(tmp_path):
    missing = tmp_path / "absent.ld"
    stream = io.StringIO()
    error_underline(str(missing), 1, 1, 1, stream)
    assert stream.getvalue() == f"Error: Could not access or find the source file: {missing}\n"


def test_format_tree_identity():
    program = Program("f.ld", [stmt("id", lam(["x"], var("x")))])
    assert format_tree(program) == "id\n└── λx\n    └── x\n"


def test_format_tree_application():
    program = Program("f.ld", [stmt("t", Application(var("a"), var("b")))])
    assert format_tree(program) == "t\n└── @\n    ├── a\n    └── b\n"


def test_format_tree_lists_all_parameters_and_statements():
    program = Program("f.ld", [
        stmt("k", lam(["x", "y"], var("x"))),
        stmt("z", var("k")),
    ])
    lines = format_tree(program).splitlines()
    assert lines[0] == "k"
    assert lines[1].endswith("λx,y")
    assert "z" in lines
    assert lines[-1].endswith("k")


def test_print_tree_matches_format_tree():
    program = Program("f.ld", [stmt("t", Application(lam(["x"], var("x")), var("t")))])
    stream = io.StringIO()
    print_tree(program, stream)
    assert stream.getvalue() == format_tree(program)


def test_transform_splits_parameters():
    body = var("x")
    program = Program("f.ld", [stmt("s", lam(["x", "y", "z"], body))])
    transform(program)
    outer = program.statements[0].expr
    assert [t.text for t in outer.params] == ["x"]
    middle = outer.body
    assert [t.text for t in middle.params] == ["z"]
    inner = middle.body
    assert [t.text for t in inner.params] == ["y"]
    assert inner.body is body


def test_transform_reaches_nested_abstractions():
    program = Program("f.ld", [
        stmt("p", Application(lam(["a", "b"], var("a")), lam(["c", "d"], var("d")))),
    ])
    transform(program)
    app = program.statements[0].expr
    for side in (app.left, app.right):
        assert len(list(side.params)) == 1
        assert isinstance(side.body, Abstraction)
        assert len(list(side.body.params)) == 1


def test_transform_keeps_check_result(tmp_path):
    program = Program("missing.ld", [stmt("k", lam(["x", "y"], var("y")))])
    transform(program)
    _, output = run_check(program)
    assert output == ""