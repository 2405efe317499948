"""Bounded meter arithmetic. Uses a linear model: Vt = V0 -/+ (r * dt)."""
import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def decay(meter: float, rate: float, dt: float, multiplier: float = 1.0) -> float:
    """Recover/decay a meter towards zero, never below it."""
    return max(0.0, meter - rate * multiplier * dt)


def increase(meter: float, amount: float, cap: float = 100.0) -> float:
    return min(cap, meter + amount)


def stamina_percent(exhaustion: float, sleep_threshold: float) -> float:
    """Stamina shown to the player is the inverted exhaustion meter."""
    return max(0.0, 100.0 - (exhaustion / sleep_threshold) * 100.0)


def evolution_percent(timer: float, target: float) -> int:
    if target <= 0:
        return 0
    return min(100, math.floor((timer / target) * 100))
