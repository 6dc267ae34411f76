from __future__ import annotations

import io

import pytest

from loxterp import (
    Interpreter,
    LoxClass,
    LoxInstance,
    OnlyInstancesCanHaveFields,
    OnlyInstancesCanHaveProperty,
    SuperClassMustBeAClass,
    UndefinedProperty,
    UnmatchedFunctionArguments,
)
from lox_trees import (
    binary,
    block,
    call,
    class_,
    expr_stmt,
    fun,
    get,
    num,
    print_,
    ret,
    set_,
    super_,
    text,
    this,
    var,
    var_decl,
)


def test_super_dispatches_to_lexical_superclass(run_lox):
    # class A { greet() { return "A"; } }
    # class B < A { greet() { return super.greet() + "B"; } }
    # print B().greet();
    out = run_lox(
        class_("A", fun("greet", [], ret(text("A")))),
        class_(
            "B",
            fun("greet", [], ret(binary(call(super_("greet")), "+", text("B")))),
            superclass="A",
        ),
        print_(call(get(call(var("B")), "greet"))),
    )
    assert out == ["AB"]


def test_super_is_lexical_not_dynamic(run_lox):
    # C inherits B's method; inside it `super` still means A.
    out = run_lox(
        class_("A", fun("name", [], ret(text("A")))),
        class_(
            "B",
            fun("name", [], ret(text("B"))),
            fun("parent", [], ret(call(super_("name")))),
            superclass="A",
        ),
        class_("C", fun("name", [], ret(text("C"))), superclass="B"),
        print_(call(get(call(var("C")), "parent"))),
    )
    assert out == ["A"]


def test_method_lookup_walks_superclass_chain(run_lox):
    out = run_lox(
        class_("A", fun("hello", [], ret(text("from A")))),
        class_("B", superclass="A"),
        class_("C", superclass="B"),
        print_(call(get(call(var("C")), "hello"))),
    )
    assert out == ["from A"]


def test_subclass_method_overrides_superclass(run_lox):
    out = run_lox(
        class_("A", fun("who", [], ret(text("A")))),
        class_("B", fun("who", [], ret(text("B"))), superclass="A"),
        print_(call(get(call(var("B")), "who"))),
    )
    assert out == ["B"]


def test_init_runs_with_arguments_and_returns_instance(run_lox):
    out = run_lox(
        class_(
            "Point",
            fun(
                "init",
                ["x", "y"],
                expr_stmt(set_(this(), "x", var("x"))),
                expr_stmt(set_(this(), "y", var("y"))),
            ),
            fun("sum", [], ret(binary(get(this(), "x"), "+", get(this(), "y")))),
        ),
        var_decl("p", call(var("Point"), num(2), num(3))),
        print_(call(get(var("p"), "sum"))),
        print_(var("p")),
        print_(var("Point")),
    )
    assert out == ["5", "Point instance", "Point"]


def test_init_return_value_is_ignored_by_constructor(run_lox):
    out = run_lox(
        class_("Odd", fun("init", [], ret(text("ignored")))),
        print_(call(var("Odd"))),
    )
    assert out == ["Odd instance"]


def test_calling_init_directly_returns_receiver(run_lox):
    out = run_lox(
        class_("Foo", fun("init", [], ret())),
        var_decl("foo", call(var("Foo"))),
        print_(call(get(var("foo"), "init"))),
    )
    assert out == ["Foo instance"]


def test_inherited_init_sets_arity():
    interpreter = Interpreter(output=io.StringIO())
    result = interpreter.run(
        [
            class_("A", fun("init", ["v"], expr_stmt(set_(this(), "v", var("v"))))),
            class_("B", superclass="A"),
            expr_stmt(call(var("B"), line=3)),
        ]
    )
    assert isinstance(result.exception, UnmatchedFunctionArguments)
    assert (result.exception.expected, result.exception.actual) == (1, 0)


def test_super_init_chain(run_lox):
    out = run_lox(
        class_("A", fun("init", ["v"], expr_stmt(set_(this(), "v", var("v"))))),
        class_(
            "B",
            fun(
                "init",
                ["v"],
                expr_stmt(call(super_("init"), binary(var("v"), "+", num(1)))),
            ),
            superclass="A",
        ),
        print_(get(call(var("B"), num(4)), "v")),
    )
    assert out == ["5"]


def test_fields_shadow_methods(run_lox):
    out = run_lox(
        class_("Box", fun("label", [], ret(text("method")))),
        var_decl("b", call(var("Box"))),
        expr_stmt(set_(var("b"), "label", text("field"))),
        print_(get(var("b"), "label")),
    )
    assert out == ["field"]


def test_bound_method_keeps_receiver(run_lox):
    out = run_lox(
        class_(
            "Person",
            fun("init", ["name"], expr_stmt(set_(this(), "name", var("name")))),
            fun("speak", [], ret(get(this(), "name"))),
        ),
        var_decl("speak", get(call(var("Person"), text("Ada")), "speak")),
        print_(call(var("speak"))),
    )
    assert out == ["Ada"]


def test_method_closes_over_this_in_nested_function(run_lox):
    out = run_lox(
        class_(
            "Thing",
            fun(
                "getCallback",
                [],
                fun("localFunction", [], print_(this())),
                ret(var("localFunction")),
            ),
        ),
        var_decl("callback", call(get(call(var("Thing")), "getCallback"))),
        expr_stmt(call(var("callback"))),
    )
    assert out == ["Thing instance"]


def test_class_declared_in_block_refers_to_itself(run_lox):
    out = run_lox(
        block(
            class_("Node", fun("make", [], ret(call(var("Node"))))),
            print_(call(get(call(var("Node")), "make"))),
        )
    )
    assert out == ["Node instance"]


def test_runtime_objects():
    interpreter = Interpreter(output=io.StringIO())
    interpreter.run(
        [class_("A", fun("m", [], ret(num(1)))), class_("B", superclass="A"), var_decl("b", call(var("B")))]
    ).raise_for_exception()
    a = interpreter.globals.get_at(0, "A")
    b_class = interpreter.globals.get_at(0, "B")
    instance = interpreter.globals.get_at(0, "b")
    assert isinstance(b_class, LoxClass) and b_class.superclass is a
    assert b_class.find_method("m") is a.methods["m"]
    assert b_class.find_method("missing") is None
    assert isinstance(instance, LoxInstance) and instance.klass is b_class


def test_superclass_must_be_a_class():
    result = Interpreter(output=io.StringIO()).run(
        [var_decl("NotAClass", text("x")), class_("B", superclass="NotAClass", line=8)]
    )
    assert isinstance(result.exception, SuperClassMustBeAClass)
    assert result.exception.line == 8


def test_undefined_property():
    result = Interpreter(output=io.StringIO()).run(
        [class_("A"), print_(get(call(var("A")), "missing", line=4))]
    )
    assert isinstance(result.exception, UndefinedProperty)
    assert result.exception.line == 4
    assert "missing" in str(result.exception)


def test_undefined_super_method():
    result = Interpreter(output=io.StringIO()).run(
        [
            class_("A"),
            class_("B", fun("m", [], ret(call(super_("nothing")))), superclass="A"),
            expr_stmt(call(get(call(var("B")), "m"))),
        ]
    )
    assert isinstance(result.exception, UndefinedProperty)


@pytest.mark.parametrize("target", [num(1), text("s")])
def test_property_access_requires_instance(target):
    result = Interpreter(output=io.StringIO()).run([print_(get(target, "field"))])
    assert isinstance(result.exception, OnlyInstancesCanHaveProperty)


def test_field_assignment_requires_instance():
    result = Interpreter(output=io.StringIO()).run([expr_stmt(set_(num(1), "field", num(2)))])
    assert isinstance(result.exception, OnlyInstancesCanHaveFields)


def test_failed_class_body_restores_environment():
    interpreter = Interpreter(output=io.StringIO())
    result = interpreter.run(
        [
            class_("A"),
            block(class_("B", superclass="A"), expr_stmt(call(var("missing")))),
        ]
    )
    assert result.exception is not None
    assert interpreter.environment is interpreter.globals
