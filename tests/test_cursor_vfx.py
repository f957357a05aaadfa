import math

import pytest

from nvframe.animation import Point
from nvframe.cursor_vfx import (
    CursorSettings,
    HighlightMode,
    ParticleTrail,
    PcgRandom,
    PointHighlight,
    TrailMode,
    VfxMode,
    new_cursor_vfx,
    rotate_vec,
    vfx_mode_from_value,
    vfx_mode_to_value,
)

DIMS = Point(8.0, 16.0)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("sonicboom", VfxMode(HighlightMode.SONIC_BOOM)),
        ("ripple", VfxMode(HighlightMode.RIPPLE)),
        ("wireframe", VfxMode(HighlightMode.WIREFRAME)),
        ("railgun", VfxMode(TrailMode.RAILGUN)),
        ("torpedo", VfxMode(TrailMode.TORPEDO)),
        ("pixiedust", VfxMode(TrailMode.PIXIE_DUST)),
        ("", VfxMode.DISABLED),
    ],
)
def test_mode_names_round_trip(name, expected):
    mode = vfx_mode_from_value(VfxMode.DISABLED, name)
    assert mode == expected
    assert vfx_mode_to_value(mode) == name


def test_unknown_name_keeps_current():
    current = VfxMode(TrailMode.TORPEDO)
    assert vfx_mode_from_value(current, "fireworks") == current


def test_non_string_keeps_current():
    current = VfxMode(HighlightMode.RIPPLE)
    assert vfx_mode_from_value(current, 3) == current


def test_cursor_settings_defaults():
    settings = CursorSettings()
    assert settings.animation_length == 0.06
    assert settings.trail_size == 0.7
    assert settings.vfx_mode.is_disabled
    assert settings.vfx_opacity == 200.0
    assert settings.vfx_particle_lifetime == 1.2


def test_new_cursor_vfx_kinds():
    highlight = new_cursor_vfx(VfxMode(HighlightMode.WIREFRAME))
    trail = new_cursor_vfx(VfxMode(TrailMode.PIXIE_DUST))
    assert isinstance(highlight, PointHighlight) and highlight.mode is HighlightMode.WIREFRAME
    assert isinstance(trail, ParticleTrail) and trail.trail_mode is TrailMode.PIXIE_DUST
    assert new_cursor_vfx(VfxMode.DISABLED) is None


def test_point_highlight_animates_then_stops():
    highlight = PointHighlight(HighlightMode.SONIC_BOOM)
    settings = CursorSettings()
    assert highlight.update(settings, Point(), DIMS, 0.01) is True
    assert 0.0 < highlight.t < 1.0
    assert highlight.update(settings, Point(), DIMS, 10.0) is False
    assert highlight.t == 1.0


def test_point_highlight_restart():
    highlight = PointHighlight(HighlightMode.RIPPLE)
    highlight.update(CursorSettings(), Point(), DIMS, 10.0)
    highlight.restart(Point(3.0, 4.0))
    assert highlight.t == 0.0
    assert highlight.center_position == Point(3.0, 4.0)


def test_pcg_is_deterministic():
    a, b = PcgRandom(), PcgRandom()
    assert [a.next_u32() for _ in range(20)] == [b.next_u32() for _ in range(20)]


def test_pcg_ranges():
    rng = PcgRandom()
    values = [rng.next_u32() for _ in range(200)]
    assert all(0 <= v < 2**32 for v in values)
    assert len(set(values)) > 190
    for _ in range(200):
        f = rng.next_float()
        assert 0.0 <= f <= 1.0
        d = rng.rand_dir()
        assert -1.0 <= d.x <= 1.0 and -1.0 <= d.y <= 1.0
        n = rng.rand_dir_normalized()
        assert n.length() == pytest.approx(1.0) or n.is_zero()


def test_rotate_vec_preserves_length_and_inverts():
    v = Point(3.0, -2.0)
    rotated = rotate_vec(v, 0.7)
    assert rotated.length() == pytest.approx(v.length())
    back = rotate_vec(rotated, -0.7)
    assert back.x == pytest.approx(v.x)
    assert back.y == pytest.approx(v.y)
    assert rotate_vec(v, 0.0) == v


def test_rotate_vec_quarter_turn():
    r = rotate_vec(Point(1.0, 0.0), math.pi / 2)
    assert r.x == pytest.approx(0.0, abs=1e-12)
    assert r.y == pytest.approx(1.0)


def test_trail_without_movement_has_no_particles():
    trail = ParticleTrail(TrailMode.RAILGUN)
    assert trail.update(CursorSettings(), Point(0.0, 0.0), DIMS, 0.016) is False
    assert trail.particles == []


@pytest.mark.parametrize("mode", list(TrailMode))
def test_trail_spawns_and_dies(mode):
    settings = CursorSettings()
    trail = ParticleTrail(mode)
    destination = Point(800.0, 0.0)
    assert trail.update(settings, destination, DIMS, 0.016) is True
    assert trail.particles
    assert trail.previous_cursor_destination == destination
    assert all(0.0 <= p.lifetime < settings.vfx_particle_lifetime for p in trail.particles)
    assert trail.update(settings, destination, DIMS, 100.0) is False
    assert trail.particles == []


def test_railgun_particles_lie_on_path_and_fade_first():
    trail = ParticleTrail(TrailMode.RAILGUN)
    settings = CursorSettings()
    trail.update(settings, Point(800.0, 0.0), DIMS, 0.016)
    spawned = len(trail.particles)
    for p in trail.particles:
        assert p.pos.y == 0.0
        assert 0.0 <= p.pos.x < 800.0
        assert p.rotation_speed == pytest.approx(math.pi * settings.vfx_particle_curl)
        assert p.speed.length() == pytest.approx(2.0 * settings.vfx_particle_speed)
    trail.update(settings, Point(800.0, 0.0), DIMS, 0.001)
    assert len(trail.particles) == spawned - 1


def test_torpedo_speed_magnitude():
    settings = CursorSettings()
    trail = ParticleTrail(TrailMode.TORPEDO)
    trail.update(settings, Point(0.0, 900.0), DIMS, 0.016)
    for p in trail.particles:
        length = p.speed.length()
        assert length == pytest.approx(settings.vfx_particle_speed) or length == 0.0


def test_pixie_dust_moves_down():
    trail = ParticleTrail(TrailMode.PIXIE_DUST)
    trail.update(CursorSettings(), Point(600.0, 600.0), DIMS, 0.016)
    assert trail.particles
    assert all(p.speed.y > 0.0 for p in trail.particles)


def test_trails_are_deterministic():
    a, b = ParticleTrail(TrailMode.TORPEDO), ParticleTrail(TrailMode.TORPEDO)
    for trail in (a, b):
        trail.update(CursorSettings(), Point(500.0, 200.0), DIMS, 0.016)
    assert a.particles == b.particles


def test_trail_restart_changes_nothing():
    trail = ParticleTrail(TrailMode.RAILGUN)
    trail.update(CursorSettings(), Point(400.0, 0.0), DIMS, 0.016)
    before = list(trail.particles)
    trail.restart(Point(5.0, 5.0))
    assert trail.particles == before
    assert trail.previous_cursor_destination == Point(400.0, 0.0)