"""Four-channel color arithmetic.

Colors are ``vec4`` values (r, g, b, a) in linear float space. The alpha
channel is carried through every operation and clamped like the others.
Accumulation is saturating: each add is followed by a clamp to [0, 1], so
intermediate values never leave the displayable range.
"""

import taichi as ti
import taichi.math as tm

vec4 = tm.vec4

BLACK = vec4(0.0, 0.0, 0.0, 0.0)


@ti.func
def clamp_color(color: vec4) -> vec4:
    """Clamp every channel to [0, 1]."""
    return tm.clamp(color, 0.0, 1.0)


@ti.func
def accumulate_color(acc: vec4, lit: vec4) -> vec4:
    """Add ``lit`` onto ``acc`` and clamp the sum (saturating add)."""
    return clamp_color(acc + lit)


@ti.func
def scale_color(color: vec4, factor: ti.f32) -> vec4:
    return color * factor


@ti.func
def multiply_color(a: vec4, b: vec4) -> vec4:
    """Component-wise product, e.g. surface color filtered by light color."""
    return a * b


def color_to_rgba8(color) -> tuple[int, int, int, int]:
    """Convert a float color to 8-bit channels.

    Channels are clamped to [0, 1] and scaled by 255 with truncation, the
    same conversion used when writing images.

    Args:
        color: Any 4-element sequence of floats.

    Returns:
        Tuple of four ints in [0, 255].
    """
    r, g, b, a = (min(max(float(c), 0.0), 1.0) for c in color)
    return int(r * 255.0), int(g * 255.0), int(b * 255.0), int(a * 255.0)
