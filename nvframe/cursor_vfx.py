"""Cursor visual effects: expanding highlights and particle trails."""

from __future__ import annotations

import logging
import math
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List, Optional, Protocol, Union

from nvframe.animation import Point

log = logging.getLogger(__name__)

_U64_MASK = (1 << 64) - 1
_U32_MASK = (1 << 32) - 1
_PCG_MULTIPLIER = 6_364_136_223_846_793_005


class HighlightMode(Enum):
    SONIC_BOOM = "sonicboom"
    RIPPLE = "ripple"
    WIREFRAME = "wireframe"


class TrailMode(Enum):
    RAILGUN = "railgun"
    TORPEDO = "torpedo"
    PIXIE_DUST = "pixiedust"


@dataclass(frozen=True)
class VfxMode:
    """The selected cursor effect: a highlight, a trail, or none."""

    effect: Optional[Union[HighlightMode, TrailMode]] = None

    DISABLED: ClassVar[VfxMode]

    @property
    def is_disabled(self) -> bool:
        return self.effect is None


VfxMode.DISABLED = VfxMode()

_MODES_BY_NAME = {
    **{mode.value: VfxMode(mode) for mode in HighlightMode},
    **{mode.value: VfxMode(mode) for mode in TrailMode},
    "": VfxMode.DISABLED,
}


def vfx_mode_from_value(current: VfxMode, value: Any) -> VfxMode:
    """Convert a setting value to a VfxMode, keeping ``current`` on bad input."""
    if not isinstance(value, str):
        log.error("Expected a VfxMode string, but received %r", value)
        return current
    try:
        return _MODES_BY_NAME[value]
    except KeyError:
        log.error("Expected a VfxMode name, but received %r", value)
        return current


def vfx_mode_to_value(mode: VfxMode) -> str:
    """The setting value naming a VfxMode."""
    return "" if mode.effect is None else mode.effect.value


@dataclass
class CursorSettings:
    """Cursor animation and effect settings."""

    antialiasing: bool = True
    animation_length: float = 0.06
    distance_length_adjust: bool = True
    animate_in_insert_mode: bool = True
    animate_command_line: bool = True
    trail_size: float = 0.7
    vfx_mode: VfxMode = VfxMode.DISABLED
    vfx_opacity: float = 200.0
    vfx_particle_lifetime: float = 1.2
    vfx_particle_density: float = 7.0
    vfx_particle_speed: float = 10.0
    vfx_particle_phase: float = 1.5
    vfx_particle_curl: float = 1.0


class CursorVfx(Protocol):
    def update(
        self,
        settings: CursorSettings,
        current_cursor_destination: Point,
        cursor_dimensions: Point,
        dt: float,
    ) -> bool: ...

    def restart(self, position: Point) -> None: ...


def _to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


class PcgRandom:
    """A small deterministic PCG (XSH-RR, 64-bit state) random generator."""

    def __init__(self) -> None:
        self.state = 0x853C_49E6_748F_EA9B
        self.inc = ((0xDA3E_39CB_94B9_5BDB << 1) | 1) & _U64_MASK

    def next_u32(self) -> int:
        old_state = self.state
        self.state = (old_state * _PCG_MULTIPLIER + self.inc) & _U64_MASK

        rot = old_state >> 59
        xsh = (((old_state >> 18) ^ old_state) >> 27) & _U32_MASK
        return ((xsh >> rot) | (xsh << ((32 - rot) % 32))) & _U32_MASK

    def next_float(self) -> float:
        """A value in [0, 1), rounded to single precision."""
        return _to_float32(math.ldexp(float(self.next_u32()), -32))

    def rand_dir(self) -> Point:
        """A vector with both coordinates in [-1, 1); not normalized."""
        x = self.next_float()
        y = self.next_float()
        return Point(x * 2.0 - 1.0, y * 2.0 - 1.0)

    def rand_dir_normalized(self) -> Point:
        return self.rand_dir().normalized()


def rotate_vec(v: Point, rot: float) -> Point:
    """Rotate a vector by ``rot`` radians."""
    sin = math.sin(rot)
    cos = math.cos(rot)
    return Point(v.x * cos - v.y * sin, v.x * sin + v.y * cos)


class PointHighlight:
    """A shape expanding from the cursor's centre after it changes shape."""

    def __init__(self, mode: HighlightMode) -> None:
        self.t = 0.0
        self.center_position = Point(0.0, 0.0)
        self.mode = mode

    def update(
        self,
        settings: CursorSettings,
        current_cursor_destination: Point,
        cursor_dimensions: Point,
        dt: float,
    ) -> bool:
        self.t = min(self.t + dt * 5.0, 1.0)
        return self.t < 1.0

    def restart(self, position: Point) -> None:
        self.t = 0.0
        self.center_position = position


@dataclass
class Particle:
    pos: Point
    speed: Point
    rotation_speed: float
    lifetime: float


class ParticleTrail:
    """Particles spawned along the path the cursor travels."""

    def __init__(self, trail_mode: TrailMode) -> None:
        self.particles: List[Particle] = []
        self.previous_cursor_destination = Point(0.0, 0.0)
        self.trail_mode = trail_mode
        self.rng = PcgRandom()

    def update(
        self,
        settings: CursorSettings,
        current_cursor_destination: Point,
        cursor_dimensions: Point,
        dt: float,
    ) -> bool:
        """Age, move and spawn particles; return whether any are alive."""
        for particle in self.particles:
            particle.lifetime -= dt
        self.particles = [p for p in self.particles if p.lifetime > 0.0]

        for particle in self.particles:
            particle.pos = particle.pos + particle.speed * dt
            particle.speed = rotate_vec(particle.speed, dt * particle.rotation_speed)

        if current_cursor_destination != self.previous_cursor_destination:
            self._spawn(settings, current_cursor_destination, cursor_dimensions)
            self.previous_cursor_destination = current_cursor_destination

        return bool(self.particles)

    def _spawn(self, settings: CursorSettings, destination: Point, dimensions: Point) -> None:
        travel = destination - self.previous_cursor_destination
        travel_distance = travel.length()
        relative_distance = travel_distance / dimensions.y

        raw_count = relative_distance**1.5 * settings.vfx_particle_density * 0.01
        particle_count = int(raw_count) if math.isfinite(raw_count) and raw_count > 0 else 0

        previous = self.previous_cursor_destination
        mode = self.trail_mode

        for i in range(particle_count):
            t = i / particle_count

            if mode is TrailMode.RAILGUN:
                phase = t / math.pi * settings.vfx_particle_phase * relative_distance
                speed = Point(math.sin(phase), math.cos(phase)) * (
                    2.0 * settings.vfx_particle_speed
                )
            elif mode is TrailMode.TORPEDO:
                travel_dir = travel.normalized()
                particle_dir = (self.rng.rand_dir_normalized() - travel_dir * 1.5).normalized()
                speed = particle_dir * settings.vfx_particle_speed
            else:
                base_dir = self.rng.rand_dir_normalized()
                direction = Point(base_dir.x * 0.5, 0.4 + abs(base_dir.y))
                speed = direction * (3.0 * settings.vfx_particle_speed)

            if mode is TrailMode.RAILGUN:
                pos = previous + travel * t
            else:
                pos = (
                    previous
                    + travel * self.rng.next_float()
                    + Point(0.0, dimensions.y * 0.5)
                )

            if mode is TrailMode.RAILGUN:
                rotation_speed = math.pi * settings.vfx_particle_curl
            else:
                rotation_speed = (
                    (self.rng.next_float() - 0.5) * (math.pi / 2) * settings.vfx_particle_curl
                )

            self.particles.append(
                Particle(
                    pos=pos,
                    speed=speed,
                    rotation_speed=rotation_speed,
                    lifetime=t * settings.vfx_particle_lifetime,
                )
            )

    def restart(self, position: Point) -> None:
        """Trails do not restart; particles keep their course."""


def new_cursor_vfx(mode: VfxMode) -> Optional[Union[PointHighlight, ParticleTrail]]:
    """The effect object for a mode, or None when effects are disabled."""
    if isinstance(mode.effect, HighlightMode):
        return PointHighlight(mode.effect)
    if isinstance(mode.effect, TrailMode):
        return ParticleTrail(mode.effect)
    return None