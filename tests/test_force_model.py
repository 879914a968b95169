"""
Tests for the Fruchterman-Reingold force model and cooling schedules.
"""

import numpy as np
import pytest

from plode import (
    CoolingSchedule,
    CoolingShape,
    ForceModel,
    InvalidConfigError,
    LayoutConfig,
    LinearCooling,
    PolynomialCooling,
    make_schedule,
)


def edges(*pairs):
    sources = np.array([s for s, _ in pairs], dtype=np.int64)
    targets = np.array([t for _, t in pairs], dtype=np.int64)
    return sources, targets


NO_EDGES = edges()


class TestForceModel:
    """Tests for repulsive and attractive forces."""

    def test_repulsion_pair(self):
        """Two nodes repel with magnitude k^2 / d along the line between them."""
        model = ForceModel(k=1.0)
        pos = np.array([[0.0, 0.0], [2.0, 0.0]])
        disp = model.repulsive(pos)
        assert disp[0] == pytest.approx([-0.5, 0.0])
        assert disp[1] == pytest.approx([0.5, 0.0])

    def test_repulsion_scales_with_k(self):
        model = ForceModel(k=3.0)
        pos = np.array([[0.0, 0.0], [0.0, 3.0]])
        assert model.repulsive(pos)[1] == pytest.approx([0.0, 3.0])

    def test_attraction_pair(self):
        """An edge pulls its endpoints together with magnitude d^2 / k."""
        model = ForceModel(k=1.0)
        pos = np.array([[0.0, 0.0], [2.0, 0.0]])
        disp = model.attractive(pos, *edges((0, 1)))
        assert disp[0] == pytest.approx([4.0, 0.0])
        assert disp[1] == pytest.approx([-4.0, 0.0])

    def test_attraction_direction_independent(self):
        """Edge direction does not change the attraction."""
        model = ForceModel(k=1.0)
        pos = np.array([[0.0, 0.0], [1.0, 1.0]])
        forward = model.attractive(pos, *edges((0, 1)))
        backward = model.attractive(pos, *edges((1, 0)))
        assert np.allclose(forward, backward)

    def test_equilibrium_at_spring_length(self):
        """Repulsion and attraction cancel at distance k."""
        model = ForceModel(k=1.5)
        pos = np.array([[0.0, 0.0], [1.5, 0.0]])
        disp = model.forces(pos, *edges((0, 1)))
        assert np.allclose(disp, 0.0)

    def test_self_loop_contributes_nothing(self):
        model = ForceModel(k=1.0)
        pos = np.array([[0.0, 0.0], [2.0, 0.0]])
        assert np.array_equal(model.attractive(pos, *edges((0, 0), (1, 1))), np.zeros((2, 2)))

    def test_duplicate_edges_add_up(self):
        """A duplicated edge doubles the attraction."""
        model = ForceModel(k=1.0)
        pos = np.array([[0.0, 0.0], [1.0, 2.0]])
        single = model.attractive(pos, *edges((0, 1)))
        double = model.attractive(pos, *edges((0, 1), (0, 1)))
        assert np.allclose(double, 2 * single)

    def test_net_force_is_zero(self):
        """Forces between pairs are equal and opposite, so they sum to zero."""
        rng = np.random.default_rng(5)
        pos = rng.uniform(-1, 1, size=(10, 2))
        model = ForceModel(k=0.7)
        disp = model.forces(pos, *edges((0, 1), (2, 3), (3, 4), (4, 2), (9, 9)))
        assert np.allclose(disp.sum(axis=0), 0.0, atol=1e-8)

    def test_coincident_nodes_separate(self):
        """Coincident nodes get equal and opposite finite repulsion."""
        model = ForceModel(k=1.0, epsilon=1e-6, rng=np.random.default_rng(0))
        pos = np.zeros((2, 2))
        disp = model.repulsive(pos)

        assert np.all(np.isfinite(disp))
        assert np.allclose(disp[0], -disp[1])
        assert np.linalg.norm(disp[0]) == pytest.approx(1e6)

    def test_coincident_directions_seeded(self):
        """Coincident directions come from the supplied generator."""
        pos = np.zeros((3, 2))
        a = ForceModel(k=1.0, rng=np.random.default_rng(9)).repulsive(pos)
        b = ForceModel(k=1.0, rng=np.random.default_rng(9)).repulsive(pos)
        c = ForceModel(k=1.0, rng=np.random.default_rng(10)).repulsive(pos)
        assert np.array_equal(a, b)
        assert not np.array_equal(a, c)

    def test_repulsion_cutoff(self):
        """Pairs beyond cutoff * k do not repel."""
        model = ForceModel(k=1.0, repulsion_cutoff=2.0)
        pos = np.array([[0.0, 0.0], [1.0, 0.0], [5.0, 0.0]])
        disp = model.repulsive(pos)
        assert disp[2] == pytest.approx([0.0, 0.0])
        assert disp[0] == pytest.approx([-1.0, 0.0])

    def test_small_inputs(self):
        """Fewer than two nodes have no repulsion."""
        model = ForceModel(k=1.0)
        assert model.repulsive(np.zeros((0, 2))).shape == (0, 2)
        assert np.array_equal(model.repulsive(np.array([[3.0, 4.0]])), np.zeros((1, 2)))

    def test_evaluation_counter(self):
        model = ForceModel(k=1.0)
        pos = np.array([[0.0, 0.0], [1.0, 0.0]])
        model.forces(pos, *NO_EDGES)
        model.forces(pos, *NO_EDGES)
        assert model.evaluations == 2


class TestCooling:
    """Tests for cooling schedules."""

    def test_linear_values(self):
        schedule = LinearCooling(t0=2.0, max_iterations=4)
        assert [schedule.temperature(i) for i in range(4)] == pytest.approx([2.0, 1.5, 1.0, 0.5])

    def test_linear_monotonic_and_near_zero(self):
        """Temperature starts at t0, never rises and ends close to zero."""
        schedule = LinearCooling(t0=0.5, max_iterations=1000)
        temps = [schedule.temperature(i) for i in range(1000)]
        assert temps[0] == 0.5
        assert all(a >= b for a, b in zip(temps, temps[1:]))
        assert temps[-1] == pytest.approx(0.0005)

    def test_polynomial(self):
        schedule = PolynomialCooling(t0=1.0, max_iterations=10, exponent=2.0)
        assert schedule.temperature(0) == 1.0
        assert schedule.temperature(5) == pytest.approx(0.25)
        temps = [schedule.temperature(i) for i in range(10)]
        assert all(a >= b for a, b in zip(temps, temps[1:]))

    def test_out_of_range(self):
        schedule = LinearCooling(t0=1.0, max_iterations=10)
        with pytest.raises(ValueError):
            schedule.temperature(10)
        with pytest.raises(ValueError):
            schedule.temperature(-1)

    def test_invalid_arguments(self):
        with pytest.raises(InvalidConfigError):
            LinearCooling(t0=-1.0, max_iterations=10)
        with pytest.raises(InvalidConfigError):
            PolynomialCooling(t0=1.0, max_iterations=0)

    def test_make_schedule(self):
        """The config picks the schedule shape."""
        linear = make_schedule(LayoutConfig(max_iterations=20), 0.3)
        assert isinstance(linear, LinearCooling)
        assert linear.temperature(0) == 0.3

        config = LayoutConfig(cooling=CoolingShape.POLYNOMIAL, cooling_exponent=3.0)
        poly = make_schedule(config, 1.0)
        assert type(poly) is PolynomialCooling
        assert poly.exponent == 3.0

    def test_protocol(self):
        assert isinstance(LinearCooling(1.0, 5), CoolingSchedule)
