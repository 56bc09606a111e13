from torchkronrod.quadrature._machine import EPSILON, MIN_NORMAL


def is_degenerate(a1: float, mid: float, b2: float) -> bool:
    """Whether bisecting ``[a1, b2]`` at ``mid`` is lost in roundoff."""
    threshold = (1 + 100 * EPSILON) * (abs(mid) + 1000 * MIN_NORMAL)

    return abs(a1) <= threshold and abs(b2) <= threshold
