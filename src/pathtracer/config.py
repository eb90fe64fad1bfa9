"""
Configuration settings for the path tracer.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

# Quality presets: samples per pixel and bounce budget
QUALITY_LEVELS = {
    "interactive": {"samples_per_pixel": 1, "max_depth": 2},
    "balanced": {"samples_per_pixel": 16, "max_depth": 8},
    "high_quality": {"samples_per_pixel": 200, "max_depth": 50},
}

TONE_MAPS = ("gamma", "reinhard")

@dataclass(frozen=True)
class RenderSettings:
    """Parameters for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Camera rays averaged per pixel.
        max_depth: Bounce budget per camera ray.
        background: Radiance returned by rays that leave the scene.
        seed: Root seed; the same seed reproduces the same image.
        workers: Worker threads; None lets the executor decide.
        tone_map: "gamma" (clamp and gamma 2) or "reinhard".
    """

    width: int = 200
    height: int = 200
    samples_per_pixel: int = 16
    max_depth: int = 8
    background: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    seed: int = 42
    workers: Optional[int] = None
    tone_map: str = "gamma"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.tone_map not in TONE_MAPS:
            raise ValueError(f"Unknown tone map {self.tone_map!r}, expected one of {TONE_MAPS}")
        if any(c < 0 for c in self.background):
            raise ValueError(f"Background radiance must be non-negative, got {self.background}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_quality(cls, name: str, **overrides) -> "RenderSettings":
        """Build settings from a QUALITY_LEVELS preset, then apply overrides."""
        if name not in QUALITY_LEVELS:
            raise ValueError(f"Unknown quality level {name!r}, expected one of {sorted(QUALITY_LEVELS)}")
        return cls(**{**QUALITY_LEVELS[name], **overrides})

    def with_overrides(self, **overrides) -> "RenderSettings":
        """Copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
