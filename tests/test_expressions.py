import io
import math
import operator

import pytest

from idiomkit.expressions import (
    Timer,
    Vector,
    VectorApply,
    VectorDifference,
    VectorExpression,
    VectorScaled,
    VectorSum,
    absolute,
    apply,
    compare_performance,
    format_vector,
    main,
    sqrt,
    square,
    traditional_add,
    traditional_complex,
)


@pytest.fixture
def vectors():
    a = Vector.filled(5, 1.0)
    b = Vector.filled(5, 2.0)
    c = Vector.filled(5, 3.0)
    a[1], a[3] = 1.5, 1.7
    b[2], b[4] = 2.5, 2.8
    c[0], c[2] = 3.2, 3.6
    return a, b, c


def test_filled_vector_holds_value():
    v = Vector.filled(4, 2.0)
    assert len(v) == 4
    assert list(v) == [2.0, 2.0, 2.0, 2.0]


def test_filled_negative_size_rejected():
    with pytest.raises(ValueError):
        Vector.filled(-1, 0.0)


def test_setitem_and_getitem():
    v = Vector([1, 2, 3])
    v[1] = 7
    assert v[1] == 7.0
    assert list(v) == [1.0, 7.0, 3.0]


def test_sum_matches_traditional_add(vectors):
    a, b, _ = vectors
    assert (a + b).evaluate() == traditional_add(a, b)


def test_compound_matches_traditional(vectors):
    a, b, c = vectors
    assert (a + b * 2.0 - c).evaluate() == traditional_complex(a, b, c, 2.0)


def test_scalar_multiplication_commutes(vectors):
    a, _, _ = vectors
    assert (a * 2.5).evaluate() == (2.5 * a).evaluate()
    assert (a * 2).evaluate() == (a + a).evaluate()


def test_difference_undoes_sum():
    a = Vector([1.0, 2.0, 3.0])
    b = Vector([4.0, 5.0, 6.0])
    assert ((a + b) - b).evaluate() == a


def test_random_access_matches_iteration(vectors):
    a, b, c = vectors
    expr = sqrt(square(a) + square(b)) - c * 0.5
    assert [expr[i] for i in range(len(expr))] == list(expr)


def test_expression_classes_evaluate():
    a = Vector([1.0, 2.0])
    b = Vector([3.0, 4.0])
    assert VectorSum(a, b).evaluate() == Vector([4.0, 6.0])
    assert VectorDifference(a, b).evaluate() == Vector([-2.0, -2.0])
    assert VectorScaled(a, 3.0).evaluate() == Vector([3.0, 6.0])
    assert VectorApply(a, lambda x: x + 1.0).evaluate() == Vector([2.0, 3.0])
    summed = a + b
    assert isinstance(summed, VectorExpression)
    assert list(summed) == [4.0, 6.0]


def test_evaluation_is_lazy():
    a = Vector([1.0, 2.0])
    b = Vector([3.0, 4.0])
    expr = a + b
    a[0] = 10.0
    assert expr[0] == a[0] + b[0]
    assert expr.evaluate()[0] == a[0] + b[0]


def test_size_mismatch_raises():
    a = Vector([1.0, 2.0])
    b = Vector([1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        a + b
    with pytest.raises(ValueError):
        a - b
    with pytest.raises(ValueError):
        traditional_add(a, b)
    with pytest.raises(ValueError):
        traditional_complex(a, a, b, 1.0)


def test_non_vector_operands_rejected():
    a = Vector([1.0])
    with pytest.raises(TypeError):
        operator.add(a, 1)
    with pytest.raises(TypeError):
        operator.mul(a, "x")
    assert operator.mul(a, 2).evaluate() == Vector([2.0])


def test_sqrt_of_square_is_absolute():
    v = Vector([-3.0, 4.0, -5.0, 0.0])
    assert sqrt(square(v)).evaluate() == absolute(v).evaluate()


def test_sqrt_of_negative_is_nan():
    result = sqrt(Vector([-4.0, 4.0])).evaluate()
    assert result[1] == 2.0
    assert math.isnan(result[0])


def test_apply_uses_function():
    v = Vector([1.0, 2.0, 3.0])
    assert apply(v, lambda x: -x).evaluate() == (v * -1).evaluate()


def test_format_vector_short():
    assert format_vector(Vector([1.0, 1.5, 2.0]), "a") == "a = [1, 1.5, 2] (size: 3)"


def test_format_vector_truncates():
    text = format_vector(Vector.filled(12, 1.0), "v")
    assert text == "v = [1, 1, 1, 1, 1, 1, 1, 1, 1, 1, ...] (size: 12)"


def test_format_vector_custom_limit():
    text = format_vector(Vector([1.0, 2.0, 3.0]), "w", max_display=2)
    assert text == "w = [1, 2, ...] (size: 3)"


def test_format_vector_empty():
    assert format_vector(Vector(), "e") == "e = [] (size: 0)"


def test_timer_reports_operation():
    out = io.StringIO()
    with Timer("work", out) as timer:
        pass
    assert timer.elapsed_us >= 0
    assert out.getvalue().count("work") == 2


def test_compare_performance_agrees():
    out = io.StringIO()
    assert compare_performance(50, out) is True
    assert "Results match: yes" in out.getvalue()


def test_main_runs(capsys):
    assert main([]) == 0
    assert "a + b = [" in capsys.readouterr().out