import pytest

from scalargrad import grad, grads, grads_list, use_graph, value
from scalargrad.core.graph_utils import (
    analyze_graph_complexity,
    get_graph_stats,
    print_computation_graph,
    print_graph_summary,
)


def test_value_passes_numbers_through():
    assert value(3) == 3
    with use_graph() as g:
        assert value(g.scalar(2.5)) == 2.5


def test_grad_single_input():
    assert grad(lambda x: x * x * x, 2.0) == 12.0
    assert grad(lambda x: (x - 1.0).relu(), 0.5) == 0.0


def test_grads_dict_form():
    f = lambda v: v["a"] * v["b"] + v["a"].pow(2.0)
    assert grads(f, {"a": 3.0, "b": 4.0}) == {"a": 10.0, "b": 3.0}


def test_grads_list_form():
    f = lambda xs: xs[0] * xs[0] + 3 * xs[1]
    assert grads_list(f, [2.0, 4.0]) == [4.0, 3.0]


def test_functional_helpers_need_a_scalar_output():
    with pytest.raises(TypeError):
        grad(lambda x: 1.0, 2.0)
    with pytest.raises(TypeError):
        grads_list(lambda xs: [xs[0]], [1.0])


def test_graph_stats():
    with use_graph() as g:
        assert get_graph_stats(g)["nodes"] == 0

        a = g.scalar(1.0)
        b = g.scalar(2.0)
        c = a * b
        (c + a).relu()
        stats = get_graph_stats(g)
        assert stats["nodes"] == 5
        assert stats["edges"] == 5
        assert stats["max_fan_in"] == 2
        assert stats["max_fan_out"] == 2  # a feeds both mul and add
        assert stats["operations"] == {"none": 2, "mul": 1, "add": 1, "relu": 1}


def test_reports_print(capsys):
    with use_graph() as g:
        a = g.scalar(1.5)
        y = a.pow(2.0) + 1.0
        y.backward()

        stats = print_graph_summary(g, detailed=True)
        print_computation_graph(g, max_nodes=2)
        out = capsys.readouterr().out
        assert "COMPUTATION GRAPH SUMMARY" in out
        assert "Node   1: pow" in out
        assert "more nodes" in out
        assert stats["nodes"] == 4

        report = analyze_graph_complexity(g)
        assert "Complexity level: Low" in report
