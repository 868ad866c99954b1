import io
import logging
import sys

import pytest

from eta.errors import EtaVariableNotFound
from eta.evaluation.evaluator import evaluate, evaluate0
from eta.interpreter import Interpreter, collect_expressions, continuation_prompt
from eta.reader.parser import parse_expression
from eta.types.values import Atom, Float, Integer, Primitive


# -----------------------------------------------------
# Evaluation boundary
# -----------------------------------------------------

@pytest.mark.parametrize("value", [Integer(7), Float(1.5), Atom("t")])
def test_self_evaluation(env, memory, value):
    assert evaluate(value, env, memory) is value


def test_primitives_and_closures_evaluate_to_themselves(env, memory):
    primitive = env.lookup(Atom("car"))
    assert isinstance(primitive, Primitive)
    assert evaluate(primitive, env, memory) is primitive
    closure = evaluate(parse_expression("(lambda (x) x)"), env, memory)
    assert evaluate(closure, env, memory) is closure


def test_quote_returns_argument_unevaluated(env, memory):
    expr = parse_expression("(quote (car 1 2 3))")
    assert evaluate(expr, env, memory) is expr.cdr.car


def test_evaluate_logs_and_returns_none(env, memory, caplog):
    assert evaluate(Atom("nope"), env, memory) is None
    assert "[eval]: Atom: nope not found in environment" in caplog.text
    assert caplog.records[-1].levelno == logging.ERROR


def test_evaluate0_raises(env, memory):
    with pytest.raises(EtaVariableNotFound):
        evaluate0(Atom("nope"), env, memory)


def test_unbounded_recursion_is_not_caught(interp):
    interp.interpret_expression("(set 'loop (lambda (x) (loop x)))")
    with pytest.raises(RecursionError):
        interp.interpret_expression("(loop 1)")


# -----------------------------------------------------
# Driver
# -----------------------------------------------------

def test_interpret_releases_after_each_turn(interp):
    interp.interpret_expression("(cons 'a '(b))")
    assert len(interp.memory) == 0
    assert interp.memory.generation == 1


def test_interpret_all(interp):
    assert interp.interpret("(set 'x 2) (car 'x) (+ x x)") == ["2", None, "4"]


def test_interpret_stops_on_syntax_error(interp):
    assert interp.interpret("(set 'x 2) )(+ x 1)") == ["2"]


def test_interpret_expression_syntax_error(interp, caplog):
    assert interp.interpret_expression("(a b") is None
    assert "Unmatched" in caplog.text


def test_interpret_expression_empty(interp):
    assert interp.interpret_expression("") is None
    assert interp.interpret_expression(None) is None


def test_interpret_program(interp, tmp_path):
    program = tmp_path / "program.lisp"
    program.write_text(
        "; factorial\n"
        "(set 'factorial\n"
        "  (lambda (x) (cond ((= x 0) 1)\n"
        "                    (t (* x (factorial (- x 1)))))))\n"
        "(car 'oops)\n"
        "(factorial 6)\n"
    )
    out = io.StringIO()
    assert interp.interpret_program(program, out, verbose=True)
    lines = out.getvalue().splitlines()
    assert lines[0].startswith("<closure (x)")
    assert lines[1:] == ["NULL", "720"]


def test_interpret_program_quiet(interp, tmp_path):
    program = tmp_path / "program.lisp"
    program.write_text("(set 'x 5)\n")
    out = io.StringIO()
    assert interp.interpret_program(program, out)
    assert out.getvalue() == ""
    assert interp.interpret_expression("x") == "5"


def test_interpret_program_syntax_error_stops(interp, tmp_path):
    program = tmp_path / "program.lisp"
    program.write_text("(set 'x 1)\n))\n(set 'x 2)\n")
    assert not interp.interpret_program(program)
    assert interp.interpret_expression("x") == "1"


def test_interpret_stream(interp):
    lines = ["(set 'x", "   '(1 2 3))", "", "(car x)", "(car 'a)", "x)", "(cdr x)"]
    out = io.StringIO()
    interp.interpret_stream(lines, out, verbose=True)
    assert out.getvalue().splitlines() == ["(1 2 3)", "1", "NULL", "(2 3)"]


def test_interpret_stream_several_per_line(interp):
    out = io.StringIO()
    interp.interpret_stream(["(set 'x 1) (+ x 1)"], out)
    assert out.getvalue() == "1\n2\n"


def test_close(interp):
    interp.close()
    assert interp.memory.closed
    assert interp.env is None


def test_context_manager():
    with Interpreter() as interp:
        assert interp.interpret_expression("'a") == "a"
    assert interp.memory.closed


# -----------------------------------------------------
# Line grouping and prompts
# -----------------------------------------------------

def feeder(lines):
    it = iter(lines)
    prompts = []

    def next_line(prompt):
        prompts.append(prompt)
        return next(it, None)

    return next_line, prompts


def test_collect_expressions_joins_lines():
    next_line, prompts = feeder(["(cons 'a", "(cons 'b", "'()))", "  ", "x"])
    assert list(collect_expressions(next_line)) == [
        ("(cons 'a (cons 'b '()))", True),
        ("x", True),
    ]
    assert prompts[:3] == ["> ", ">> ", ">>  "]


def test_collect_expressions_invalid():
    next_line, _ = feeder(["a)", "(b"])
    # The open expression at end of input is dropped
    assert list(collect_expressions(next_line)) == [("a)", False)]


@pytest.mark.parametrize("text,expected", [("(a", ">> "), ("((a (b", ">>   "), ("a", ">>")])
def test_continuation_prompt(text, expected):
    assert continuation_prompt(text) == expected


# -----------------------------------------------------
# Deep but bounded recursion
# -----------------------------------------------------

def test_interpreter_raises_recursion_limit():
    with Interpreter(recursion_limit=12345):
        assert sys.getrecursionlimit() >= 12345


@pytest.mark.parametrize("depth", [100, 200, 300])
def test_deep_recursion(interp, depth):
    interp.interpret_expression("(set 'count (lambda (n) (cond ((= n 0) 0) (t (+ 1 (count (- n 1)))))))")
    assert interp.interpret_expression(f"(count {depth})") == str(depth)


def test_recursion_over_long_list(interp):
    interp.interpret_expression("(set 'len (lambda (xs) (cond ((eq xs '()) 0) (t (+ 1 (len (cdr xs)))))))")
    items = " ".join(str(i) for i in range(250))
    assert interp.interpret_expression(f"(len '({items}))") == "250"


def test_deeply_nested_literal(interp):
    nested = "(" * 600 + ")" * 600
    assert interp.interpret_expression(f"(set 'deep '{nested})") == nested
    assert interp.interpret_expression("deep") == nested


def test_interpret_program_continues_after_evaluation_error(interp, tmp_path):
    program = tmp_path / "program.lisp"
    program.write_text("(set 'x 1)\n(undefined-fn)\n(set 'x 2)\n")
    assert interp.interpret_program(program)
    assert interp.interpret_expression("x") == "2"
