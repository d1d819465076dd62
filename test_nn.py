import numpy as np
import pytest

from scalargrad import (
    InitConfig,
    Layer,
    MLP,
    ModelOutput,
    ModelOutputError,
    Neuron,
    OutputKind,
    use_graph,
)
from scalargrad.core.node import OpKind


def test_neuron_parameters():
    with use_graph() as g:
        n = g.neuron(4, True)
        assert len(n.w) == 4
        assert n.b is not None
        assert len(n.parameters()) == 5
        assert n.parameters()[-1] == n.b
        for p in n.parameters():
            assert p.op.kind is OpKind.NONE
            assert -1.0 <= p.data < 1.0
            assert p.grad == 0.0


def test_neuron_evaluates_weighted_sum_plus_bias():
    with use_graph() as g:
        n = Neuron(g, 2, relu=False)
        x = [g.scalar(2.0), g.scalar(-3.0)]
        out = n(x)
        assert out.kind is OutputKind.SCALAR
        expected = n.w[0].data * 2.0 + n.w[1].data * -3.0 + n.b.data
        assert out.as_scalar().data == pytest.approx(expected)


def test_neuron_relu_flag():
    with use_graph() as g:
        n = Neuron(g, 1, relu=True)
        y = n([g.scalar(1.0)]).as_scalar()
        assert y.op.kind is OpKind.RELU
        assert y.data >= 0.0

        lin = Neuron(g, 1, relu=False)
        assert lin([g.scalar(1.0)]).as_scalar().op.kind is OpKind.ADD


def test_neuron_accepts_plain_numbers():
    with use_graph() as g:
        n = Neuron(g, 3, relu=False)
        y = n([1.0, 0.0, -1.0]).as_scalar()
        expected = n.w[0].data - n.w[2].data + n.b.data
        assert y.data == pytest.approx(expected)


def test_neuron_gradients_match_inputs():
    with use_graph() as g:
        n = Neuron(g, 2, relu=False)
        x = [g.scalar(2.0), g.scalar(-3.0)]
        n(x).as_scalar().backward()
        assert n.w[0].grad == 2.0
        assert n.w[1].grad == -3.0
        assert n.b.grad == 1.0
        assert x[0].grad == n.w[0].data
        assert x[1].grad == n.w[1].data


def test_neuron_rejects_wrong_input_width():
    with use_graph() as g:
        n = Neuron(g, 3)
        with pytest.raises(ValueError):
            n([g.scalar(1.0)])


def test_layer_parameters_and_output():
    with use_graph() as g:
        layer = g.layer(4, 2, True)
        assert len(layer.parameters()) == 10
        out = layer([g.scalar(0.5)] * 4)
        assert out.kind is OutputKind.VECTOR
        assert len(out.as_vector()) == 2


def test_mlp_shapes_and_relu_placement():
    with use_graph() as g:
        m = g.mlp(4, [3, 3, 1], True)
        assert len(m.layers) == 3
        # (4+1)*3 + (3+1)*3 + (3+1)*1
        assert len(m.parameters()) == 31
        assert [n.relu for layer in m.layers for n in layer.neurons] == [True] * 6 + [False]

        out = m([g.scalar(v) for v in (1.0, -2.0, 0.5, 3.0)])
        assert out.kind is OutputKind.VECTOR
        (y,) = out.as_vector()
        assert y.op.kind is OpKind.ADD


def test_mlp_without_relu_is_linear_everywhere():
    with use_graph() as g:
        m = MLP(g, 2, [2, 1], relu=False)
        assert not any(n.relu for layer in m.layers for n in layer.neurons)


def test_mlp_backward_reaches_every_parameter():
    with use_graph() as g:
        m = MLP(g, 2, [1], relu=False)
        y = m([3.0, 5.0]).as_vector()[0]
        y.backward()
        w0, w1, b = m.parameters()
        assert w0.grad == 3.0
        assert w1.grad == 5.0
        assert b.grad == 1.0

        m.zero_grad()
        assert all(p.grad == 0.0 for p in m.parameters())


def test_seeded_init_is_reproducible():
    cfg = InitConfig(seed=7)
    with use_graph() as g1, use_graph() as g2:
        a = [float(p.data) for p in MLP(g1, 3, [2, 1], init=cfg).parameters()]
        b = [float(p.data) for p in MLP(g2, 3, [2, 1], init=cfg).parameters()]
    assert a == b


def test_init_range_is_respected_and_symmetric():
    with use_graph() as g:
        layer = Layer(g, 50, 40, init=InitConfig(seed=0))
        values = np.array([float(p.data) for p in layer.parameters()])
        assert values.min() >= -1.0
        assert values.max() < 1.0
        assert abs(values.mean()) < 0.1

        narrow = Neuron(g, 10, init=InitConfig(low=0.0, high=0.5, seed=1))
        assert all(0.0 <= p.data < 0.5 for p in narrow.parameters())


def test_invalid_model_sizes():
    with use_graph() as g:
        with pytest.raises(ValueError):
            Neuron(g, 0)
        with pytest.raises(ValueError):
            Layer(g, 3, 0)
        with pytest.raises(ValueError):
            MLP(g, 3, [])
    with pytest.raises(ValueError):
        InitConfig(low=1.0, high=1.0)


def test_model_output_variants():
    with use_graph() as g:
        s = g.scalar(1.0)
        assert ModelOutput.none().kind is OutputKind.NONE
        assert ModelOutput.of_scalar(s).as_scalar() == s
        assert ModelOutput.of_vector([s, s]).as_vector() == [s, s]

        with pytest.raises(ModelOutputError):
            ModelOutput.none().as_scalar()
        with pytest.raises(ModelOutputError):
            ModelOutput.of_vector([s]).as_scalar()
        with pytest.raises(ModelOutputError):
            ModelOutput.of_scalar(s).as_vector()


def test_neuron_parameters_list_bias_last():
    with use_graph() as g:
        n = Neuron(g, 3)
        params = n.parameters()
        assert params[:3] == n.w
        assert params[3] == n.b
        # minted in the same order
        assert [p.index for p in params] == sorted(p.index for p in params)
