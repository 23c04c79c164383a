"""Unit tests for the Ray dataclass, vector helpers and color arithmetic."""

import pytest
import taichi as ti


class TestRay:
    """Tests for Ray construction and evaluation."""

    def test_ray_at(self):
        """Test evaluating a point along a ray."""
        from src.whitted.core.ray import make_ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 4.0)

        test_kernel()
        p = result[None]
        assert p[0] == pytest.approx(1.0)
        assert p[1] == pytest.approx(2.0)
        assert p[2] == pytest.approx(-1.0)

    def test_normalize_and_length(self):
        """Test vector normalization and length."""
        from src.whitted.core.ray import length, normalize, vec3

        norm_length = ti.field(dtype=ti.f32, shape=())
        raw_length = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 0.0)
            raw_length[None] = length(v)
            norm_length[None] = length(normalize(v))

        test_kernel()
        assert raw_length[None] == pytest.approx(5.0, abs=1e-5)
        assert norm_length[None] == pytest.approx(1.0, abs=1e-6)


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_head_on(self):
        """Test that a ray hitting a surface head-on bounces straight back."""
        from src.whitted.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, 1.0))

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1]) < 1e-6
        assert r[2] == pytest.approx(1.0)

    def test_reflect_at_angle(self):
        """Test that only the normal component flips."""
        from src.whitted.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert r[0] == pytest.approx(1.0)
        assert r[1] == pytest.approx(1.0)
        assert abs(r[2]) < 1e-6


class TestColor:
    """Tests for saturating color arithmetic."""

    def test_accumulate_onto_black_is_identity_for_in_range_colors(self):
        """Test that adding a [0, 1] color onto black returns it unchanged."""
        from src.whitted.core.color import BLACK, accumulate_color, vec4

        result = ti.Vector.field(4, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = accumulate_color(BLACK, vec4(0.25, 0.5, 0.75, 1.0))

        test_kernel()
        c = result[None]
        assert c[0] == pytest.approx(0.25)
        assert c[1] == pytest.approx(0.5)
        assert c[2] == pytest.approx(0.75)
        assert c[3] == pytest.approx(1.0)

    def test_accumulate_clamps_every_channel(self):
        """Test that sums above 1 saturate, including alpha."""
        from src.whitted.core.color import accumulate_color, vec4

        result = ti.Vector.field(4, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = accumulate_color(vec4(0.8, 0.2, 0.6, 0.9), vec4(0.5, 0.1, 0.6, 0.5))

        test_kernel()
        c = result[None]
        assert c[0] == pytest.approx(1.0)
        assert c[1] == pytest.approx(0.3)
        assert c[2] == pytest.approx(1.0)
        assert c[3] == pytest.approx(1.0)

    def test_clamping_is_order_dependent(self):
        """Test that clamping after each add makes accumulation order matter."""
        from src.whitted.core.color import BLACK, accumulate_color, vec4

        forward = ti.Vector.field(4, dtype=ti.f32, shape=())
        backward = ti.Vector.field(4, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            a = vec4(1.5, 0.0, 0.0, 0.0)
            b = vec4(-0.5, 0.0, 0.0, 0.0)
            forward[None] = accumulate_color(accumulate_color(BLACK, a), b)
            backward[None] = accumulate_color(accumulate_color(BLACK, b), a)

        test_kernel()
        assert forward[None][0] == pytest.approx(0.5)
        assert backward[None][0] == pytest.approx(1.0)

    def test_multiply_and_scale(self):
        """Test component-wise product and scalar scaling."""
        from src.whitted.core.color import multiply_color, scale_color, vec4

        result = ti.Vector.field(4, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = scale_color(
                multiply_color(vec4(0.5, 1.0, 0.2, 1.0), vec4(1.0, 0.5, 1.0, 1.0)), 2.0
            )

        test_kernel()
        c = result[None]
        assert c[0] == pytest.approx(1.0)
        assert c[1] == pytest.approx(1.0)
        assert c[2] == pytest.approx(0.4)
        assert c[3] == pytest.approx(2.0)

    @pytest.mark.parametrize(
        "color, expected",
        [
            ((0.0, 0.0, 0.0, 0.0), (0, 0, 0, 0)),
            ((1.0, 1.0, 1.0, 1.0), (255, 255, 255, 255)),
            ((0.5, 0.999, 0.1, 1.0), (127, 254, 25, 255)),
            ((2.0, -1.0, 0.5, 1.0), (255, 0, 127, 255)),
        ],
    )
    def test_color_to_rgba8_truncates(self, color, expected):
        """Test that 8-bit conversion clamps and truncates."""
        from src.whitted.core.color import color_to_rgba8

        assert color_to_rgba8(color) == expected
