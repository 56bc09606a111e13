import pytest
import torch

ORDERS = [15, 21, 31, 41, 51, 61]


class TestGaussLegendreNodesWeights:
    def test_invalid_n_raises(self):
        from torchkronrod.quadrature import gauss_legendre_nodes_weights

        with pytest.raises(ValueError, match="at least 1"):
            gauss_legendre_nodes_weights(0)

    def test_single_point(self):
        from torchkronrod.quadrature import gauss_legendre_nodes_weights

        nodes, weights = gauss_legendre_nodes_weights(1)

        assert nodes.tolist() == [0.0]
        assert weights.tolist() == [2.0]

    @pytest.mark.parametrize("n", [2, 5, 10, 30])
    def test_weights_sum_to_two(self, n):
        from torchkronrod.quadrature import gauss_legendre_nodes_weights

        nodes, weights = gauss_legendre_nodes_weights(n)

        assert nodes.shape == (n,)
        assert torch.all(nodes[1:] > nodes[:-1])
        assert torch.allclose(
            weights.sum(), torch.tensor(2.0, dtype=torch.float64), atol=1e-13
        )


class TestGaussKronrodNodesWeights:
    def test_invalid_order_raises(self):
        from torchkronrod.quadrature import gauss_kronrod_nodes_weights

        with pytest.raises(ValueError, match="order must be one of"):
            gauss_kronrod_nodes_weights(17)

    @pytest.mark.parametrize("order", ORDERS)
    def test_shapes(self, order):
        from torchkronrod.quadrature import gauss_kronrod_nodes_weights

        nodes, k_weights, g_weights, g_indices = gauss_kronrod_nodes_weights(
            order
        )

        assert nodes.shape == (order,)
        assert k_weights.shape == (order,)
        assert g_weights.shape == (order // 2,)
        assert g_indices.shape == (order // 2,)
        assert g_indices.dtype == torch.long

    @pytest.mark.parametrize("order", ORDERS)
    def test_nodes_sorted_and_symmetric(self, order):
        from torchkronrod.quadrature import gauss_kronrod_nodes_weights

        nodes, k_weights, _, _ = gauss_kronrod_nodes_weights(order)

        assert torch.all(nodes[1:] > nodes[:-1])
        assert (nodes.abs() < 1).all()
        assert torch.equal(nodes, -nodes.flip(0))
        assert torch.equal(k_weights, k_weights.flip(0))

    @pytest.mark.parametrize("order", ORDERS)
    def test_weights_sum_to_two(self, order):
        from torchkronrod.quadrature import gauss_kronrod_nodes_weights

        _, k_weights, g_weights, _ = gauss_kronrod_nodes_weights(order)
        two = torch.tensor(2.0, dtype=torch.float64)

        assert (k_weights > 0).all()
        assert (g_weights > 0).all()
        assert torch.allclose(k_weights.sum(), two, atol=1e-14)
        assert torch.allclose(g_weights.sum(), two, atol=1e-14)

    @pytest.mark.parametrize("order", ORDERS)
    def test_embedded_gauss_rule_matches_golub_welsch(self, order):
        """Tabulated Gauss nodes/weights agree with the eigenvalue method"""
        from torchkronrod.quadrature import (
            gauss_kronrod_nodes_weights,
            gauss_legendre_nodes_weights,
        )

        nodes, _, g_weights, g_indices = gauss_kronrod_nodes_weights(order)
        expected_nodes, expected_weights = gauss_legendre_nodes_weights(
            order // 2
        )

        assert torch.allclose(nodes[g_indices], expected_nodes, atol=1e-12)
        assert torch.allclose(g_weights, expected_weights, atol=1e-12)

    @pytest.mark.parametrize("order", ORDERS)
    def test_kronrod_exact_for_polynomials(self, order):
        """K(2m+1) integrates x^k exactly well beyond degree 2m"""
        from torchkronrod.quadrature import gauss_kronrod_nodes_weights

        nodes, k_weights, _, _ = gauss_kronrod_nodes_weights(order)
        m = order // 2

        for k in range(0, 3 * m + 1, 2):
            result = (k_weights * nodes**k).sum()
            expected = torch.tensor(2.0 / (k + 1), dtype=torch.float64)

            assert torch.allclose(result, expected, rtol=1e-12, atol=1e-15)

    @pytest.mark.parametrize("order", ORDERS)
    def test_gauss_exact_for_polynomials(self, order):
        from torchkronrod.quadrature import gauss_kronrod_nodes_weights

        nodes, _, g_weights, g_indices = gauss_kronrod_nodes_weights(order)
        m = order // 2

        for k in range(0, 2 * m, 2):
            result = (g_weights * nodes[g_indices] ** k).sum()
            expected = torch.tensor(2.0 / (k + 1), dtype=torch.float64)

            assert torch.allclose(result, expected, rtol=1e-12, atol=1e-15)

    def test_float32(self):
        from torchkronrod.quadrature import gauss_kronrod_nodes_weights

        nodes, k_weights, g_weights, _ = gauss_kronrod_nodes_weights(
            21, dtype=torch.float32
        )

        assert nodes.dtype == torch.float32
        assert k_weights.dtype == torch.float32
        assert g_weights.dtype == torch.float32


class TestKronrodTables:
    @pytest.mark.parametrize("order", ORDERS)
    def test_layout(self, order):
        """Descending nodes ending at the centre, one Gauss weight per odd slot"""
        from torchkronrod.quadrature._nodes import kronrod_tables

        xgk, wg, wgk = kronrod_tables(order)

        assert len(xgk) == len(wgk) == (order + 1) // 2
        assert len(wg) == len(xgk) // 2
        assert xgk[-1] == 0.0
        assert all(x > y for x, y in zip(xgk, xgk[1:]))
