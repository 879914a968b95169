"""Tests for input validation and layout configuration."""

import dataclasses

import numpy as np
import pytest

from plode import CoolingShape, LayoutConfig
from plode.validation import (
    InvalidCanvasSizeError,
    InvalidConfigError,
    InvalidEdgeError,
    InvalidPositionsError,
    NumericalInstabilityError,
    ValidationError,
    validate_canvas_size,
    validate_edge_endpoints,
    validate_iterations,
    validate_margin,
    validate_position_array,
    validate_positive,
    validate_seed,
    validate_stride,
)


class TestCanvasSizeValidation:
    """Tests for canvas size validation."""

    def test_valid_size(self):
        """Valid canvas size returns tuple."""
        w, h = validate_canvas_size([800, 600])
        assert w == 800.0
        assert h == 600.0

    def test_zero_width_raises(self):
        """Zero width raises InvalidCanvasSizeError."""
        with pytest.raises(InvalidCanvasSizeError, match="width must be positive"):
            validate_canvas_size([0, 600])

    def test_negative_height_raises(self):
        """Negative height raises InvalidCanvasSizeError."""
        with pytest.raises(InvalidCanvasSizeError, match="height must be positive"):
            validate_canvas_size([800, -100])

    def test_nan_width_raises(self):
        """NaN is not a usable width."""
        with pytest.raises(InvalidCanvasSizeError):
            validate_canvas_size([float("nan"), 600])

    def test_single_element_raises(self):
        """Single element raises InvalidCanvasSizeError."""
        with pytest.raises(InvalidCanvasSizeError, match="must have 2 elements"):
            validate_canvas_size([800])

    def test_margin(self):
        """Margins must be non-negative and leave room to draw."""
        assert validate_margin(10, 100, 100) == 10.0
        with pytest.raises(InvalidCanvasSizeError):
            validate_margin(-1, 100, 100)
        with pytest.raises(InvalidCanvasSizeError):
            validate_margin(30, 100, 60)


class TestScalarValidation:
    """Tests for scalar config validators."""

    def test_positive(self):
        assert validate_positive("k", 2) == 2.0
        for bad in (0, -1, float("inf"), float("nan")):
            with pytest.raises(InvalidConfigError, match="k must be positive"):
                validate_positive("k", bad)

    def test_iterations(self):
        """Iteration counts must be integers >= 1."""
        assert validate_iterations(1) == 1
        with pytest.raises(InvalidConfigError, match=">= 1"):
            validate_iterations(0)
        with pytest.raises(InvalidConfigError):
            validate_iterations(2.5)
        with pytest.raises(InvalidConfigError):
            validate_iterations(True)

    def test_seed(self):
        assert validate_seed(None) is None
        assert validate_seed(0) == 0
        with pytest.raises(InvalidConfigError):
            validate_seed(True)
        with pytest.raises(InvalidConfigError):
            validate_seed(-3)

    def test_stride(self):
        assert validate_stride(3) == 3
        with pytest.raises(InvalidConfigError):
            validate_stride(0)


class TestEdgeValidation:
    """Tests for edge endpoint validation."""

    def test_valid_edges(self):
        """Known endpoints, duplicates and self-loops pass."""
        issues = validate_edge_endpoints([("a", "b"), ("a", "b"), ("b", "b")], {"a", "b"})
        assert issues == []

    def test_unknown_source_raises(self):
        with pytest.raises(InvalidEdgeError, match="source 'x'"):
            validate_edge_endpoints([("x", "a")], {"a"})

    def test_non_strict_returns_issues(self):
        """Non-strict mode reports every bad endpoint."""
        issues = validate_edge_endpoints([("a", "x"), ("y", "z")], {"a"}, strict=False)
        assert [index for index, _ in issues] == [0, 1, 1]


class TestPositionValidation:
    """Tests for position array validation."""

    def test_valid_array(self):
        arr = validate_position_array([[0, 1], [2, 3]], 2)
        assert arr.dtype == np.float64
        assert arr.shape == (2, 2)

    def test_wrong_shape(self):
        with pytest.raises(InvalidPositionsError, match="shape"):
            validate_position_array([[0, 1, 2]], 1)

    def test_non_finite(self):
        with pytest.raises(InvalidPositionsError, match="finite"):
            validate_position_array([[0, float("inf")]], 1)

    def test_empty(self):
        assert validate_position_array([], 0).shape == (0, 2)


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    def test_validation_errors_are_value_errors(self):
        for exc in (InvalidConfigError, InvalidEdgeError, InvalidPositionsError):
            assert issubclass(exc, ValidationError)
            assert issubclass(exc, ValueError)

    def test_numerical_instability(self):
        """NumericalInstabilityError carries the failing iteration and nodes."""
        err = NumericalInstabilityError("boom", iteration=4, nodes=("a",))
        assert isinstance(err, ArithmeticError)
        assert not isinstance(err, ValidationError)
        assert err.iteration == 4
        assert err.nodes == ["a"]


class TestLayoutConfig:
    """Tests for LayoutConfig defaults and validation."""

    def test_defaults(self):
        config = LayoutConfig()
        assert config.k == 1.0
        assert config.t0 is None
        assert config.cooling is CoolingShape.LINEAR
        assert config.max_iterations == 300
        assert config.record_frames is False
        assert config.frame_stride == 1

    def test_initial_temperature(self):
        """t0 defaults to k * sqrt(n) / 10."""
        assert LayoutConfig(k=2.0).initial_temperature(25) == pytest.approx(1.0)
        assert LayoutConfig(k=2.0).initial_temperature(0) == pytest.approx(0.2)
        assert LayoutConfig(t0=0.7).initial_temperature(100) == 0.7

    def test_cooling_from_string(self):
        assert LayoutConfig(cooling="polynomial").cooling is CoolingShape.POLYNOMIAL

    @pytest.mark.parametrize(
        "field, value",
        [
            ("k", 0),
            ("k", -1.0),
            ("t0", -0.5),
            ("cooling", "cubic"),
            ("cooling_exponent", 0),
            ("max_iterations", 0),
            ("convergence_threshold", -1e-3),
            ("seed", 1.5),
            ("seed", -1),
            ("seed", "x"),
            ("frame_stride", 0),
            ("epsilon", 0),
            ("repulsion_cutoff", -2),
            ("init_scale", 0),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        """Invalid values are rejected when the config is built."""
        with pytest.raises(InvalidConfigError):
            LayoutConfig(**{field: value})

    def test_frozen(self):
        config = LayoutConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.k = 2.0

    def test_replace_validates(self):
        """replace() returns a new validated config."""
        config = LayoutConfig(seed=1)
        changed = config.replace(seed=2, k=3)
        assert changed.seed == 2
        assert changed.k == 3.0
        assert config.seed == 1
        with pytest.raises(InvalidConfigError):
            config.replace(max_iterations=-5)

    @pytest.mark.parametrize("seed", [-1, 2.5, "x", float("nan"), float("inf")])
    def test_rejects_bad_seed(self, seed):
        """Seeds must be non-negative integers, checked before any run."""
        with pytest.raises(InvalidConfigError, match="seed"):
            LayoutConfig(seed=seed)

    def test_seed_normalized(self):
        """Integral floats and numpy integers are stored as plain ints."""
        assert LayoutConfig(seed=2.0).seed == 2
        assert type(LayoutConfig(seed=2.0).seed) is int
        assert type(LayoutConfig(seed=np.int64(7)).seed) is int
        assert LayoutConfig(seed=None).seed is None
