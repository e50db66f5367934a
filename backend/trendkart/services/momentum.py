"""
Trendkart - Momentum

Velocity-boosted "featured score" used to rank products that are hot
right now.
"""

DEFAULT_ALPHA = 0.5


def featured_score(current: float, previous: float, alpha: float = DEFAULT_ALPHA) -> float:
    """
    Boost the current score by its velocity since the previous cycle.

    Velocity uses a fixed unit time step per cycle, not measured elapsed
    time. The result may leave [0, 1] or go negative when a small score
    falls sharply.

    Args:
        current: Trend score for this cycle
        previous: Trend score from the previous cycle
        alpha: Velocity sensitivity

    Returns:
        current * (1 + alpha * (current - previous))
    """
    velocity = current - previous
    return current * (1 + alpha * velocity)
