"""Time-driven parameter tweens that write through the store."""

from typing import Callable, Dict, List, Optional

from config import galaxy as config
from .parameters import InvalidParameter, ParameterStore


def linear(t: float) -> float:
    return t


def _power_in_out(exponent: float) -> Callable[[float], float]:
    """GSAP powerN.inOut curve, where exponent = N + 1."""
    def ease(t: float) -> float:
        if t < 0.5:
            return (2.0 * t) ** exponent / 2.0
        return 1.0 - (2.0 - 2.0 * t) ** exponent / 2.0
    return ease


power1_in_out = _power_in_out(2)
power2_in_out = _power_in_out(3)
power3_in_out = _power_in_out(4)
power4_in_out = _power_in_out(5)

EASINGS: Dict[str, Callable[[float], float]] = {
    "linear": linear,
    "none": linear,
    "power1.inOut": power1_in_out,
    "power2.inOut": power2_in_out,
    "power3.inOut": power3_in_out,
    "power4.inOut": power4_in_out,
}


def get_easing(name: str) -> Callable[[float], float]:
    try:
        return EASINGS[name]
    except KeyError:
        raise ValueError(f"Unknown easing '{name}' (known: {', '.join(EASINGS)})") from None


class Tween:
    """
    Moves one store parameter toward a target value.

    The start value is read from the store when the delay has elapsed, so
    a delayed tween picks up whatever earlier tweens left behind. Every
    active update, including the final one, writes the store and then
    calls on_update.
    """

    def __init__(self, store: ParameterStore, name: str, to: float,
                 duration: float, delay: float = 0.0,
                 ease: Callable[[float], float] = power1_in_out,
                 on_update: Optional[Callable[[], None]] = None):
        if isinstance(ease, str):
            ease = get_easing(ease)
        # Unknown names raise from store.get; colors do not interpolate
        current = store.get(name)
        if isinstance(current, bool) or not isinstance(current, (int, float)):
            raise InvalidParameter(name, to, "only numeric parameters can be tweened")
        try:
            self.to = float(to)
        except (TypeError, ValueError):
            raise InvalidParameter(name, to, "target must be a number") from None
        self.store = store
        self.name = name
        self.duration = max(0.0, float(duration))
        self.delay = max(0.0, float(delay))
        self.ease = ease
        self.on_update = on_update

        self.elapsed = 0.0
        self.start_value: Optional[float] = None
        self.finished = False

    @property
    def started(self) -> bool:
        return self.start_value is not None

    def value_at(self, progress: float) -> float:
        return self.start_value + (self.to - self.start_value) * self.ease(progress)

    def update(self, dt: float) -> bool:
        """Advance by dt seconds. Returns True if the store was written."""
        if self.finished:
            return False
        self.elapsed += dt
        if self.elapsed < self.delay:
            return False

        if not self.started:
            self.start_value = float(self.store.get(self.name))

        if self.duration == 0.0:
            progress = 1.0
        else:
            progress = min(1.0, (self.elapsed - self.delay) / self.duration)
        if progress >= 1.0:
            self.finished = True

        try:
            self.store.set(self.name, self.value_at(progress))
        except InvalidParameter as e:
            print(f"[Timeline] Rejected {e}")
            return False

        if self.on_update is not None:
            self.on_update()
        return True


class Timeline:
    """A set of concurrently running tweens advanced by one clock."""

    def __init__(self, tweens: Optional[List[Tween]] = None):
        self.tweens: List[Tween] = list(tweens or [])
        self.time = 0.0
        self._announced = False

    def add(self, tween: Tween) -> Tween:
        self.tweens.append(tween)
        self._announced = False
        return tween

    @property
    def finished(self) -> bool:
        return all(t.finished for t in self.tweens)

    def advance(self, dt: float):
        """Move every tween forward by dt seconds, in insertion order."""
        if self.finished:
            return
        self.time += dt
        for tween in self.tweens:
            tween.update(dt)
        if self.finished and not self._announced:
            self._announced = True
            print(f"[Timeline] Finished after {self.time:.2f}s")


def build_intro_timeline(store: ParameterStore, on_update: Callable[[], None],
                         schedule: Optional[List[dict]] = None) -> Timeline:
    """
    Tweens from config.ANIMATION, each regenerating through on_update.

    Raises InvalidParameter for entries naming an unknown or non-numeric
    parameter, or with a non-numeric target.
    """
    schedule = config.ANIMATION if schedule is None else schedule
    timeline = Timeline()
    for entry in schedule:
        timeline.add(Tween(
            store,
            entry["name"],
            to=entry["to"],
            duration=entry["duration"],
            delay=entry.get("delay", 0.0),
            ease=get_easing(entry.get("ease", "linear")),
            on_update=on_update,
        ))
    return timeline
