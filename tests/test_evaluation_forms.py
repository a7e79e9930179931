import pytest

from copylisp.types.errors import (
    FatalError, LispArityError, LispSyntaxError, LispTypeError, NoMatchingClause
)


def run(interp, *sources):
    result = None
    for source in sources:
        result = interp.eval_to_string(source)
    return result


@pytest.mark.parametrize(
    "source,expected",
    [
        # quote
        ("(quote a)", "a"),
        ("(quote (a b c))", "(a b c)"),
        ("(quote (1 . 2))", "(1 . 2)"),
        ("(quote ())", "()"),
        # booleans and unbound names
        ("#t", "#t"),
        ("#f", "()"),
        ("no-such-name", "()"),
        ("()", "()"),
        # pairs and lists
        ("(cons 1 2)", "(1 . 2)"),
        ("(cons 1 ())", "(1)"),
        ("(cons 1 (cons 2 (cons 3 ())))", "(1 2 3)"),
        ("(car (quote (a b)))", "a"),
        ("(cdr (quote (a b)))", "(b)"),
        ("(cdr (quote (a . b)))", "b"),
        ("(list 1 2 3)", "(1 2 3)"),
        ("(list)", "()"),
        ("(list (+ 1 1) (quote x) (list))", "(2 x ())"),
        # predicates
        ("(equal? (cons 1 2) (cons 1 2))", "#t"),
        ("(equal? (cons 1 2) (cons 1 3))", "()"),
        ("(equal? (quote (a (b) c)) (list (quote a) (list (quote b)) (quote c)))", "#t"),
        ("(equal? 1 1 1)", "#t"),
        ("(equal? 1 1 2)", "()"),
        ("(equal? 1)", "#t"),
        ("(equal? () ())", "#t"),
        ("(equal? () (quote a))", "()"),
        ("(equal? car car)", "#t"),
        ("(equal? car cdr)", "()"),
        ("(pair? (cons 1 2))", "#t"),
        ("(pair? 1)", "()"),
        ("(pair? ())", "()"),
        ("(null? ())", "#t"),
        ("(null? #f)", "#t"),
        ("(null? 1)", "()"),
        # or
        ("(or #f 2 3)", "2"),
        ("(or)", "()"),
        ("(or #f #f)", "()"),
        ("(or 1 (car 1))", "1"),
        # begin
        ("(begin 1 2 3)", "3"),
        ("(begin)", "()"),
        # cond
        ("(cond (#f 1) (#t 2))", "2"),
        ("(cond ((equal? 1 2) (quote a)) ((equal? 1 1) (quote b)))", "b"),
        ("(cond ((quote x) 1) ((car 1) 2))", "1"),
        # lambda
        ("((lambda (x y) (+ x y)) 2 3)", "5"),
        ("((lambda () 7))", "7"),
        ("((lambda (x)))", None),
        ("((lambda (x) 1 2 x) 3)", "3"),
        # define
        ("(define x 5)", "5"),
    ]
)
def test_forms(interp, source, expected):
    if expected is None:
        with pytest.raises(LispArityError):
            interp.eval(source)
    else:
        assert interp.eval_to_string(source) == expected


def test_define_then_lookup(interp):
    assert run(interp, "(define x 5)", "x") == "5"


def test_redefinition_shadows(interp):
    assert run(interp, "(define x 1)", "(define x 2)", "x") == "2"


def test_define_returns_bound_value(interp):
    assert run(interp, "(define xs (list 1 2))") == "(1 2)"


def test_define_binds_in_innermost_frame(interp):
    assert run(interp, "(define f (lambda () (define y 1) y))", "(f)") == "1"
    assert run(interp, "y") == "()"


def test_parameters_shadow_globals(interp):
    assert run(interp, "(define x 1)", "((lambda (x) x) 2)", "x") == "1"


def test_closures_capture_their_defining_environment(interp):
    assert run(
        interp,
        "(define make-adder (lambda (n) (lambda (x) (+ x n))))",
        "(define add2 (make-adder 2))",
        "(define n 1000)",
        "(add2 40)",
    ) == "42"


def test_arguments_evaluated_in_caller_environment(interp):
    assert run(interp, "(define x 10)", "((lambda (x y) y) 1 x)") == "10"


def test_non_tail_recursion(interp):
    assert run(
        interp,
        "(define fact (lambda (n) (cond ((equal? n 0) 1) (#t (* n (fact (- n 1)))))))",
        "(fact 10)",
    ) == "3628800"


def test_higher_order_functions(interp):
    assert run(
        interp,
        "(define map (lambda (f l) (cond ((null? l) ()) (#t (cons (f (car l)) (map f (cdr l)))))))",
        "(map (lambda (x) (* x x)) (list 1 2 3 4))",
    ) == "(1 4 9 16)"


def test_display_and_newline(interp):
    assert run(interp, "(display (quote (1 . 2)))") == "()"
    run(interp, "(newline)", "(display car)", "(begin (display 1) (display 2))")
    assert interp.out.getvalue() == "(1 . 2)\n<builtin car>12"


# -----------------------------------------------------
# Reported and fatal errors
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source, error",
    [
        ("(car 1)", LispTypeError),
        ("(cdr ())", LispTypeError),
        ("(car)", LispArityError),
        ("(cons 1)", LispArityError),
        ("(1 2)", LispTypeError),
        ("(undefined-function 1)", LispTypeError),
        ("((lambda (x) x))", LispArityError),
        ("((lambda (x) x) 1 2)", LispArityError),
        # malformed special forms and calls
        ("(quote)", LispSyntaxError),
        ("(quote . a)", LispSyntaxError),
        ("(cond (#t))", LispSyntaxError),
        ("(cond 1)", LispSyntaxError),
        ("(cond (#t 1) . 2)", LispSyntaxError),
        ("(define)", LispSyntaxError),
        ("(define x)", LispSyntaxError),
        ("(define (f) 1)", LispSyntaxError),
        ("(lambda)", LispSyntaxError),
        ("(lambda (x . y) x)", LispSyntaxError),
        ("(lambda ((x)) x)", LispSyntaxError),
        ("(lambda (x) . x)", LispSyntaxError),
        ("(begin 1 . 2)", LispSyntaxError),
        ("(or . 1)", LispSyntaxError),
        ("(+ 1 . 2)", LispSyntaxError),
    ]
)
def test_reported_errors(interp, source, error):
    with pytest.raises(error):
        interp.eval(source)
    # registry is back to the interpreter's own permanent scope
    assert interp.roots.depth == 1
    assert len(interp.roots) == 2
    assert interp.eval_to_string("(+ 1 1)") == "2"


@pytest.mark.parametrize("source", ["(cond (#f 1))", "(cond)", "(cond ((null? 1) 2))"])
def test_cond_without_true_clause_is_fatal(interp, source):
    with pytest.raises(NoMatchingClause):
        interp.eval(source)


def test_fatal_errors_share_a_base_class():
    assert issubclass(NoMatchingClause, FatalError)


def test_interpreters_are_independent():
    from copylisp.interpreter import Interpreter

    a, b = Interpreter(), Interpreter()
    a.eval("(define x 1)")
    assert a.eval_to_string("x") == "1"
    assert b.eval_to_string("x") == "()"


def test_malformed_define_leaves_no_binding(interp):
    with pytest.raises(LispSyntaxError, match="define"):
        interp.eval("(define x)")
    assert interp.eval_to_string("x") == "()"


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(define f (lambda (x) x)) (equal? f f)", "#t"),
        ("(equal? car car)", "#t"),
        ("(equal? car cdr)", "()"),
        ("(equal? (lambda (x) x) (lambda (x) x))", "()"),
        ("(define f (lambda (x) x)) (equal? (list f 1) (list f 1))", "#t"),
        ("(define mk (lambda () (lambda (x) x))) (equal? (mk) (mk))", "()"),
    ]
)
def test_equal_on_functions(interp, source, expected):
    assert interp.eval_to_string(source) == expected
