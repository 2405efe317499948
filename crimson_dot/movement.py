import math
from dataclasses import dataclass

from crimson_dot.meters import clamp


@dataclass(frozen=True)
class PointerGeometry:
    """Pet-to-pointer geometry measured at the start of a tick."""
    dx: float
    dy: float
    distance: float
    direction_x: float
    direction_y: float
    moved: bool
    in_band: bool
    outside_range: bool


def distance(x1, y1, x2, y2) -> float:
    dx = x1 - x2
    dy = y1 - y2
    return math.sqrt(dx * dx + dy * dy)


def normalize(dx, dy, length):
    """Unit vector along (dx, dy); a zero-length vector yields (0, 0)."""
    if not length:
        return 0.0, 0.0
    return dx / length, dy / length


def measure(pet, pointer, config, viewport) -> PointerGeometry:
    """
    Distance is measured between scaled-down pointer and pet coordinates,
    which ties pointer sensitivity to the rendering scale.
    """
    px, py = pointer
    s = config.pointer_scale
    dx = px * s - pet.x * s
    dy = py * s - pet.y * s
    d = math.sqrt(dx * dx + dy * dy)
    dir_x, dir_y = normalize(dx, dy, d)
    moved = (abs(px - pet.last_pointer_x) > config.pointer_tolerance or
             abs(py - pet.last_pointer_y) > config.pointer_tolerance)
    min_distance = viewport.scale(config.min_distance * config.tile_size)
    max_follow = viewport.scale(config.max_follow_distance * config.tile_size)
    return PointerGeometry(
        dx=dx,
        dy=dy,
        distance=d,
        direction_x=dir_x,
        direction_y=dir_y,
        moved=moved,
        in_band=min_distance < d < max_follow,
        outside_range=d >= max_follow,
    )


def speed_boost(level: int, config) -> float:
    return 1.0 + level * config.evolution_speed_step


def chase_speed(d: float, level: int, config, viewport) -> float:
    """Closer -> faster. Inside the activation distance speed follows a quadratic ease."""
    activation = viewport.scale(config.activation_distance * config.tile_size)
    if d >= activation:
        return config.min_speed
    normalized = d / activation
    eased = 1.0 - normalized * normalized
    return (config.min_speed + (config.max_speed - config.min_speed) * eased) * speed_boost(level, config)


def seek_speed(config) -> float:
    return config.min_speed + (config.max_speed - config.min_speed) * config.seek_speed_fraction


def step(pet, dir_x, dir_y, speed, viewport) -> float:
    """Move the pet, clamped to the world, and return the distance actually covered."""
    max_x, max_y = viewport.bounds_for(pet.width, pet.height)
    prev_x, prev_y = pet.x, pet.y
    pet.x = clamp(pet.x + dir_x * speed, 0.0, max_x)
    pet.y = clamp(pet.y + dir_y * speed, 0.0, max_y)
    return distance(pet.x, pet.y, prev_x, prev_y)


def chase(pet, geometry: PointerGeometry, config, viewport) -> float:
    speed = chase_speed(geometry.distance, pet.evolution_level, config, viewport)
    return step(pet, geometry.direction_x, geometry.direction_y, speed, viewport)


def seek(pet, target, config, viewport) -> bool:
    """Walk towards target at the fixed seeking speed. Returns True once within reach."""
    to_x = target.x - pet.x
    to_y = target.y - pet.y
    d = math.sqrt(to_x * to_x + to_y * to_y)
    if d <= config.couch_threshold:
        return True
    dir_x, dir_y = normalize(to_x, to_y, d)
    step(pet, dir_x, dir_y, seek_speed(config), viewport)
    return False


def center_on(pet, target, viewport, x_offset=0.0, y_offset=0.0):
    """Place the pet in the middle of target (couch or bowl), kept inside the world."""
    max_x, max_y = viewport.bounds_for(pet.width, pet.height)
    x = target.x + (viewport.scale(target.width) - viewport.scale(pet.width)) / 2 + x_offset
    y = target.y + (viewport.scale(target.height) - viewport.scale(pet.height)) / 2 + y_offset
    pet.x = clamp(x, 0.0, max_x)
    pet.y = clamp(y, 0.0, max_y)
