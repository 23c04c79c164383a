"""Tests for the Whitted shading integrator.

Tests cover:
- Render target setup and validation
- Misses and the recursion depth ceiling
- Diffuse shading with directional and spherical lights
- Hard shadows, including occluders beyond the light
- Mirror reflection and termination between parallel mirrors
"""

import math

import pytest

INV_PI = 1.0 / math.pi

WHITE = (1.0, 1.0, 1.0, 1.0)


def _add_sphere(center, radius, diffuse=1.0, specular=0.0, color=WHITE):
    from src.whitted.scene.intersection import add_sphere, vec3, vec4

    return add_sphere(vec3(*center), radius, vec4(*color), diffuse, specular)


def _add_plane(origin, normal, diffuse=1.0, specular=0.0, color=WHITE):
    from src.whitted.scene.intersection import add_plane, vec3, vec4

    return add_plane(vec3(*origin), vec3(*normal), vec4(*color), diffuse, specular)


def _add_directional(direction, intensity=1.0, color=WHITE):
    from src.whitted.scene.lights import add_directional_light, vec3, vec4

    return add_directional_light(vec3(*direction), vec4(*color), intensity)


def _add_spherical(position, intensity, color=WHITE):
    from src.whitted.scene.lights import add_spherical_light, vec3, vec4

    return add_spherical_light(vec3(*position), vec4(*color), intensity)


class TestRenderTarget:
    """Tests for render target setup."""

    def test_setup_and_dimensions(self):
        from src.whitted.core.integrator import get_image_dimensions, setup_render_target

        setup_render_target(32, 18)
        assert get_image_dimensions() == (32, 18)

    @pytest.mark.parametrize("width, height", [(0, 10), (10, -1), (4096, 10), (10, 4096)])
    def test_invalid_dimensions(self, width, height):
        from src.whitted.core.integrator import setup_render_target

        with pytest.raises(ValueError):
            setup_render_target(width, height)

    def test_image_requires_setup(self):
        from src.whitted.core import integrator

        integrator._render_target_initialized[None] = 0
        with pytest.raises(RuntimeError, match="Render target not set up"):
            integrator.get_image_numpy()
        with pytest.raises(RuntimeError, match="Render target not set up"):
            integrator.render_image()

    def test_image_numpy_shape(self):
        import numpy as np

        from src.whitted.core.integrator import get_image_numpy, setup_render_target

        setup_render_target(6, 4)
        image = get_image_numpy()
        assert image.shape == (4, 6, 4)
        assert image.dtype == np.float32
        assert np.all(image == 0.0)


class TestCastRay:
    """Tests for the recursive color evaluation of a single ray."""

    def test_miss_is_transparent_black(self):
        from src.whitted.core.integrator import cast_ray_from

        _add_sphere((0.0, 0.0, -4.0), 1.0)
        _add_directional((0.0, 0.0, -1.0))

        assert cast_ray_from((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == (0.0, 0.0, 0.0, 0.0)

    def test_depth_beyond_ceiling_is_black(self):
        from src.whitted.core.integrator import MAX_DEPTH, cast_ray_from

        _add_sphere((0.0, 0.0, -4.0), 1.0)
        _add_directional((0.0, 0.0, -1.0))

        lit = cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), MAX_DEPTH)
        assert lit[0] == pytest.approx(INV_PI, abs=1e-5)

        beyond = cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), MAX_DEPTH + 1)
        assert beyond == (0.0, 0.0, 0.0, 0.0)

    def test_directional_head_on(self):
        """Test Lambert shading facing the light: color * intensity / pi."""
        from src.whitted.core.integrator import cast_ray_from

        _add_sphere((0.0, 0.0, -4.0), 1.0, color=(1.0, 0.5, 0.25, 1.0))
        _add_directional((0.0, 0.0, -1.0), intensity=2.0)

        color = cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color[0] == pytest.approx(min(2.0 * INV_PI, 1.0), abs=1e-5)
        assert color[1] == pytest.approx(1.0 * INV_PI, abs=1e-5)
        assert color[2] == pytest.approx(0.5 * INV_PI, abs=1e-5)
        assert color[3] == pytest.approx(2.0 * INV_PI, abs=1e-5)

    def test_surface_facing_away_is_black(self):
        from src.whitted.core.integrator import cast_ray_from

        _add_sphere((0.0, 0.0, -4.0), 1.0)
        # Light arrives from behind the sphere
        _add_directional((0.0, 0.0, 1.0))

        assert cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) == (0.0, 0.0, 0.0, 0.0)

    def test_zero_diffuse_skips_lighting(self):
        from src.whitted.core.integrator import cast_ray_from

        _add_sphere((0.0, 0.0, -4.0), 1.0, diffuse=0.0)
        _add_directional((0.0, 0.0, -1.0))

        assert cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) == (0.0, 0.0, 0.0, 0.0)

    def test_diffuse_weight_scales_result(self):
        from src.whitted.core.integrator import cast_ray_from

        _add_sphere((0.0, 0.0, -4.0), 1.0, diffuse=0.5)
        _add_directional((0.0, 0.0, -1.0))

        color = cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color[0] == pytest.approx(0.5 * INV_PI, abs=1e-5)

    def test_light_contributions_accumulate_and_saturate(self):
        from src.whitted.core.integrator import cast_ray_from

        _add_sphere((0.0, 0.0, -4.0), 1.0)
        _add_directional((0.0, 0.0, -1.0))
        _add_directional((0.0, 0.0, -1.0))

        two = cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert two[0] == pytest.approx(2.0 * INV_PI, abs=1e-5)

        _add_directional((0.0, 0.0, -1.0))
        _add_directional((0.0, 0.0, -1.0))
        four = cast_ray_from((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert four == pytest.approx((1.0, 1.0, 1.0, 1.0))


class TestShadows:
    """Tests for shadow rays."""

    def _floor(self):
        # Shading normal points up
        _add_plane((0.0, -1.0, 0.0), (0.0, -1.0, 0.0))

    def test_unoccluded_floor_is_lit(self):
        from src.whitted.core.integrator import cast_ray_from

        self._floor()
        _add_directional((0.0, -1.0, 0.0))

        color = cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert color[0] == pytest.approx(INV_PI, abs=1e-5)

    def test_occluder_blocks_directional_light(self):
        from src.whitted.core.integrator import cast_ray_from

        self._floor()
        _add_sphere((0.0, 5.0, 0.0), 1.0)
        _add_directional((0.0, -1.0, 0.0))

        assert cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0)) == (0.0, 0.0, 0.0, 0.0)

    def test_occluder_between_surface_and_spherical_light(self):
        from src.whitted.core.integrator import cast_ray_from

        self._floor()
        _add_sphere((0.0, 1.0, 0.0), 0.5)
        _add_spherical((0.0, 3.0, 0.0), 64.0 * math.pi)

        assert cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0)) == (0.0, 0.0, 0.0, 0.0)

    def test_occluder_beyond_spherical_light_casts_no_shadow(self):
        from src.whitted.core.integrator import cast_ray_from

        self._floor()
        _add_sphere((0.0, 10.0, 0.0), 1.0)
        # Distance 4 from the floor point: 64 pi / (4 pi * 16) = 1
        _add_spherical((0.0, 3.0, 0.0), 64.0 * math.pi)

        color = cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert color[0] == pytest.approx(INV_PI, abs=1e-4)


class TestReflection:
    """Tests for mirror reflection."""

    def _mirror_floor_under_sphere(self):
        # Mirror floor at y = -1, diffuse sphere above the camera
        _add_plane((0.0, -1.0, 0.0), (0.0, -1.0, 0.0), diffuse=0.0, specular=1.0)
        _add_sphere((0.0, 3.0, 0.0), 1.0)

    def test_mirror_shows_reflected_surface(self):
        from src.whitted.core.integrator import cast_ray_from

        self._mirror_floor_under_sphere()
        # Unit intensity at the bottom of the sphere (distance 1)
        _add_spherical((0.0, 1.0, 0.0), 4.0 * math.pi)

        color = cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert color == pytest.approx((INV_PI, INV_PI, INV_PI, INV_PI), abs=1e-4)

    def test_reflection_added_once_per_light(self):
        from src.whitted.core.integrator import cast_ray_from

        self._mirror_floor_under_sphere()
        _add_spherical((0.0, 1.0, 0.0), 4.0 * math.pi)
        _add_spherical((0.0, 1.0, 0.0), 4.0 * math.pi)

        # Sphere: 2 / pi. Mirror adds it once per light and saturates.
        color = cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert color == pytest.approx((1.0, 1.0, 1.0, 1.0), abs=1e-5)

    def test_mirror_with_no_lights_is_black(self):
        from src.whitted.core.integrator import cast_ray_from

        self._mirror_floor_under_sphere()
        assert cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0)) == (0.0, 0.0, 0.0, 0.0)

    def test_parallel_mirrors_terminate(self):
        """Test that rays bouncing between facing mirrors stop at the ceiling."""
        from src.whitted.core.integrator import cast_ray_from

        _add_plane((0.0, -1.0, 0.0), (0.0, -1.0, 0.0), diffuse=0.5, specular=0.5)
        _add_plane((0.0, 1.0, 0.0), (0.0, 1.0, 0.0), diffuse=0.5, specular=0.5)
        _add_spherical((0.5, 0.0, 0.0), 10.0)

        color = cast_ray_from((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert all(0.0 <= c <= 1.0 for c in color)
        assert color[0] > 0.0


class TestRenderPixel:
    """Tests for single-pixel rendering through the camera."""

    def test_render_pixel_matches_cast_ray(self):
        from src.whitted.camera.pinhole import (
            PinholeCamera,
            get_prime_ray_direction,
            setup_camera,
        )
        from src.whitted.core.integrator import cast_ray_from, render_pixel

        setup_camera(PinholeCamera(width=40, height=30, fov=90.0))
        _add_sphere((0.0, 0.0, -4.0), 1.0)
        _add_directional((0.0, -1.0, 0.0))

        direction = get_prime_ray_direction(20, 12)
        expected = cast_ray_from((0.0, 0.0, 0.0), direction)
        assert render_pixel(20, 12) == pytest.approx(expected, abs=1e-6)
