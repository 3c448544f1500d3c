from typing import Callable
from PyQt6.QtCore import QPropertyAnimation, QEasingCurve, QSequentialAnimationGroup
from PyQt6.QtWidgets import QGraphicsOpacityEffect


FADE_DURATION_MS = 500


def create_fade_animation(opacity_effect: QGraphicsOpacityEffect, duration: int = FADE_DURATION_MS,
                          fade_in: bool = True) -> QPropertyAnimation:
    """Create a fade in/out animation on an existing opacity effect"""
    animation = QPropertyAnimation(opacity_effect, b"opacity")
    animation.setDuration(duration)

    if fade_in:
        animation.setStartValue(0.0)
        animation.setEndValue(1.0)
    else:
        animation.setStartValue(1.0)
        animation.setEndValue(0.0)

    animation.setEasingCurve(QEasingCurve.Type.InOutQuad)
    return animation


def create_fade_swap_animation(opacity_effect: QGraphicsOpacityEffect, on_swap: Callable[[], None],
                               duration: int = FADE_DURATION_MS) -> QSequentialAnimationGroup:
    """Fade out, call on_swap while invisible, then fade back in"""
    group = QSequentialAnimationGroup()

    fade_out = create_fade_animation(opacity_effect, duration, fade_in=False)
    fade_out.finished.connect(on_swap)
    fade_in = create_fade_animation(opacity_effect, duration, fade_in=True)

    group.addAnimation(fade_out)
    group.addAnimation(fade_in)
    return group
