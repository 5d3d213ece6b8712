from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Sequence

from overlay_effects.errors import KeyframeError


def clamp(value: float, min_value: float = 0.0, max_value: float = 1.0) -> float:
    return max(min_value, min(max_value, value))


def linear(t: float) -> float:
    return t


def ease_out_expo(t: float) -> float:
    if t == 1:
        return 1.0
    try:
        return 1 - 2 ** (-10 * t)
    except OverflowError:
        # far below 0 the curve diverges downward
        return -math.inf


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    # multiplication saturates to inf where float ** raises
    u = -2 * t + 2
    return 1 - u * u * u / 2


EASING_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease_out_expo": ease_out_expo,
    "ease_in_out_cubic": ease_in_out_cubic,
}


def resolve_easing(name: str | None) -> Callable[[float], float]:
    if not name:
        return linear
    return EASING_FUNCTIONS.get(name, linear)


def eased_ramp(
    progress: float,
    delay: float = 0.0,
    offset: float = 0.0,
    speed: float = 1.0,
    factor: float = 1.0,
    easing: str | Callable[[float], float] = "ease_out_expo",
) -> float:
    """
    Delayed, sped-up progress clamped to [0, 1] and fed through ``easing``.

    ``easing`` is either a curve or a name from ``EASING_FUNCTIONS``.
    """
    curve = easing if callable(easing) else resolve_easing(easing)
    return curve(clamp((progress - delay - offset) * speed * factor))


@dataclass(frozen=True)
class Keyframe:
    t: float
    props: Mapping[str, float] = field(default_factory=dict)


def _normalize_track(keyframes: Iterable[Keyframe]) -> list[Keyframe]:
    track = sorted(keyframes, key=lambda k: k.t)
    if not track:
        raise KeyframeError("Keyframe track must contain at least one keyframe")

    names = set(track[0].props)
    for keyframe in track[1:]:
        if set(keyframe.props) != names:
            raise KeyframeError(
                f"Keyframe at t={keyframe.t} declares {sorted(keyframe.props)}, "
                f"expected {sorted(names)}"
            )
    return track


def _interpolate_sorted(track: Sequence[Keyframe], times: Sequence[float], progress: float) -> dict[str, float]:
    # index of the last keyframe with t <= progress, so duplicate t values resolve to the last one
    idx = bisect_right(times, progress) - 1
    if idx < 0:
        return dict(track[0].props)
    if idx >= len(track) - 1:
        return dict(track[-1].props)

    prev = track[idx]
    curr = track[idx + 1]
    local_t = (progress - prev.t) / (curr.t - prev.t)
    return {
        name: value + (curr.props[name] - value) * local_t
        for name, value in prev.props.items()
    }


def interpolate_keyframes(keyframes: Iterable[Keyframe], progress: float) -> dict[str, float]:
    track = _normalize_track(keyframes)
    return _interpolate_sorted(track, [k.t for k in track], progress)


class KeyframeTrack:
    """Validated, time-sorted keyframes that can be sampled repeatedly."""

    def __init__(self, keyframes: Iterable[Keyframe]):
        track = _normalize_track(keyframes)
        self._keyframes = tuple(
            Keyframe(t=k.t, props=MappingProxyType(dict(k.props))) for k in track
        )
        self._times = [k.t for k in self._keyframes]

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[float, Mapping[str, float]]]) -> KeyframeTrack:
        return cls(Keyframe(t=t, props=props) for t, props in pairs)

    @property
    def keyframes(self) -> tuple[Keyframe, ...]:
        return self._keyframes

    @property
    def property_names(self) -> frozenset[str]:
        return frozenset(self._keyframes[0].props)

    def __len__(self) -> int:
        return len(self._keyframes)

    def at(self, progress: float) -> dict[str, float]:
        return _interpolate_sorted(self._keyframes, self._times, progress)
