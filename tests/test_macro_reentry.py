import pytest

from rocket.errors import RocketRecursionLimit, RocketSyntaxError
from rocket.interpreter import Interpreter
from rocket.modules.loaders import MemoryLoader


CHAIN = '(:define a (:b)) (:define b (:c)) (:define c "done") (:a)'


def make(**kwargs):
    return Interpreter(loader=MemoryLoader({}), version=lambda: "1.2.3", **kwargs)


# -----------------------------------------------------
# Produced text is evaluated again
# -----------------------------------------------------

def test_macro_output_with_directives_is_reevaluated(itp):
    assert itp.eval(r'(:define a "(:concat \"x\" \"y\")") (:a)') == "xy"


def test_surrounding_text_is_kept_verbatim(itp):
    source = r'(:define a "Hello  (:strong \"you\")!\n") (:a)'
    assert itp.eval(source) == "Hello  <strong>you</strong>!\n"


def test_plain_parentheses_are_left_alone(itp):
    assert itp.eval('(:define a "f(x) = (y)") (:a)') == "f(x) = (y)"


def test_template_output_sees_its_captures(itp):
    source = r'(:define-template t (re "(\w+)") "<(:1)>") (:t "abc")'
    assert itp.eval(source) == "<abc>"


def test_reentry_is_repeated_until_no_directives_remain(itp):
    source = r'(:define a "(:concat \"(:\" \"version)\")") (:a)'
    assert itp.eval(source) == "3.4.0"


def test_reentry_uses_the_call_site_scope(itp):
    source = r'(:define a "(:who)") (:let (who "inner") (:a))'
    assert itp.eval(source) == "inner"


def test_broken_directive_in_output_is_a_syntax_error(itp):
    with pytest.raises(RocketSyntaxError):
        itp.eval(r'(:define bad "(:concat \"x\"") (:bad)')


# -----------------------------------------------------
# Depth limit
# -----------------------------------------------------

def test_self_reference_hits_the_limit(itp):
    with pytest.raises(RocketRecursionLimit):
        itp.eval("(:define loop (:loop)) (:loop)")


def test_self_reference_through_text_hits_the_limit(itp):
    with pytest.raises(RocketRecursionLimit):
        itp.eval('(:define loop "again (:loop)") (:loop)')


def test_mutual_recursion_hits_the_limit(itp):
    with pytest.raises(RocketRecursionLimit):
        itp.eval("(:define ping (:pong)) (:define pong (:ping)) (:ping)")


def test_recursive_template_hits_the_limit(itp):
    with pytest.raises(RocketRecursionLimit):
        itp.eval('(:define-template t (re ".*") (:t "again")) (:t "x")')


def test_chain_within_limit():
    assert make(max_depth=3).eval(CHAIN) == "done"


def test_chain_over_limit():
    with pytest.raises(RocketRecursionLimit) as exc:
        make(max_depth=2).eval(CHAIN)
    assert "2" in exc.value.message


def test_limit_from_environment(monkeypatch):
    monkeypatch.setenv("ROCKET_MAX_DEPTH", "2")
    with pytest.raises(RocketRecursionLimit):
        make().eval(CHAIN)


def test_depth_counter_resets_between_siblings():
    # each call returns before the next starts
    assert make(max_depth=3).eval(CHAIN + " " + "(:a)" * 10) == "done" * 11


# -----------------------------------------------------
# Stack exhaustion surfaces as the same error
# -----------------------------------------------------

def test_recursion_through_nested_builtins_hits_the_limit(itp):
    source = "(:define loop (:concat (:concat (:concat (:concat (:concat (:loop))))))) (:loop)"
    with pytest.raises(RocketRecursionLimit):
        itp.eval(source)


def test_deeply_nested_builtins_hit_the_limit(itp):
    source = "(:concat " * 2000 + '"x"' + ")" * 2000
    with pytest.raises(RocketRecursionLimit) as exc:
        itp.eval(source)
    assert exc.value.position is not None


def test_moderate_nesting_still_evaluates(itp):
    source = "(:concat " * 50 + '"x"' + ")" * 50
    assert itp.eval(source) == "x"
