"""
Value objects passed between the sizing, orientation and compositing helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class AspectBox:
    """A rectangle described by a required ratio and up to two known sides."""

    aspect_ratio: float
    width: float | None = None
    height: float | None = None


@dataclass(frozen=True)
class TransformDescriptor:
    """Translate/rotate/scale applied to an image; neutral values are no-ops."""

    translate_x: float = 0
    translate_y: float = 0
    rotate: float = 0  # degrees
    scale_x: float = 1
    scale_y: float = 1
    aspect_ratio: float | None = None  # ratio of the drawn image itself

    @property
    def rotated(self) -> bool:
        return is_number(self.rotate) and self.rotate != 0

    @property
    def scaled(self) -> bool:
        return (
            is_number(self.scale_x)
            and is_number(self.scale_y)
            and (self.scale_x != 1 or self.scale_y != 1)
        )

    def combine(self, other: TransformDescriptor) -> TransformDescriptor:
        """Stack another transform on top: rotations add, scales multiply."""
        return replace(
            self,
            translate_x=self.translate_x + other.translate_x,
            translate_y=self.translate_y + other.translate_y,
            rotate=self.rotate + other.rotate,
            scale_x=self.scale_x * other.scale_x,
            scale_y=self.scale_y * other.scale_y,
            aspect_ratio=other.aspect_ratio if other.aspect_ratio is not None else self.aspect_ratio,
        )


@dataclass(frozen=True)
class SizeConstraints:
    """Output size bounds. Missing or zero maximums are unbounded."""

    max_width: float | None = None
    max_height: float | None = None
    min_width: float | None = None
    min_height: float | None = None


@dataclass(frozen=True)
class RenderOptions:
    fill_color: str | None = None
    image_smoothing_enabled: bool = True
    image_smoothing_quality: str | None = None


def is_number(value: object) -> bool:
    # bool is an int subclass but never a meaningful angle or factor
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value == value  # NaN check
