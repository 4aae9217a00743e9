"""Simple 2D particle batches and an engine that drives them."""

from collections.abc import Callable
from dataclasses import dataclass, field

from .sprite_batch import Renderer, SpriteBatch
from .vertex import ColorRGBA8, Texture

Vec2 = tuple[float, float]

_FULL_UV = (0.0, 0.0, 1.0, 1.0)


@dataclass
class Particle2D:
    position: Vec2 = (0.0, 0.0)
    velocity: Vec2 = (0.0, 0.0)
    color: ColorRGBA8 = field(default_factory=ColorRGBA8)
    life: float = 0.0
    width: float = 0.0

    @property
    def active(self) -> bool:
        return self.life > 0.0


def default_particle_update(particle: Particle2D, delta_time: float) -> None:
    """Move the particle along its velocity."""
    x, y = particle.position
    vx, vy = particle.velocity
    particle.position = (x + vx * delta_time, y + vy * delta_time)


ParticleUpdate = Callable[[Particle2D, float], None]


class ParticleBatch2D:
    """A fixed pool of particles sharing a texture and an update rule."""

    def __init__(
        self,
        max_particles: int,
        decay_rate: float,
        texture: Texture,
        update_func: ParticleUpdate = default_particle_update,
    ) -> None:
        if max_particles < 1:
            raise ValueError("max_particles must be at least 1")
        self._particles = [Particle2D() for _ in range(max_particles)]
        self.decay_rate = decay_rate
        self.texture = texture
        self._update_func = update_func
        self._last_free_particle = 0

    @property
    def particles(self) -> tuple[Particle2D, ...]:
        return tuple(self._particles)

    def update(self, delta_time: float) -> None:
        for particle in self._particles:
            if particle.active:
                self._update_func(particle, delta_time)
                particle.life -= self.decay_rate * delta_time

    def draw(self, sprite_batch: SpriteBatch) -> None:
        for particle in self._particles:
            if particle.active:
                x, y = particle.position
                dest_rect = (x, y, particle.width, particle.width)
                sprite_batch.draw(dest_rect, _FULL_UV, self.texture.id, 0.0, particle.color)

    def add_particle(
        self, position: Vec2, velocity: Vec2, color: ColorRGBA8, width: float
    ) -> None:
        """Spawn a particle, reusing a dead slot or overwriting the first one."""
        particle = self._particles[self._find_free_particle()]
        particle.life = 1.0
        particle.position = (float(position[0]), float(position[1]))
        particle.velocity = (float(velocity[0]), float(velocity[1]))
        particle.color = color
        particle.width = width

    def _find_free_particle(self) -> int:
        count = len(self._particles)
        start = self._last_free_particle
        for index in (*range(start, count), *range(start)):
            if not self._particles[index].active:
                self._last_free_particle = index
                return index
        return 0


class ParticleEngine2D:
    """Owns particle batches and updates and draws them together."""

    def __init__(self) -> None:
        self._batches: list[ParticleBatch2D] = []

    @property
    def batches(self) -> tuple[ParticleBatch2D, ...]:
        return tuple(self._batches)

    def add_particle_batch(self, particle_batch: ParticleBatch2D) -> None:
        self._batches.append(particle_batch)

    def update(self, delta_time: float) -> None:
        for batch in self._batches:
            batch.update(delta_time)

    def draw(self, sprite_batch: SpriteBatch, renderer: Renderer) -> None:
        """Render each batch in its own sprite-batch pass."""
        for batch in self._batches:
            sprite_batch.begin()
            batch.draw(sprite_batch)
            sprite_batch.end()
            sprite_batch.render_batch(renderer)