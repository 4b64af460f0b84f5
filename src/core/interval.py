# core/interval.py
import math


class Interval:
    """
    A range of real values. Hit queries use it as an open interval (min, max).
    """
    __slots__ = ("min", "max")

    def __init__(self, minimum: float = math.inf, maximum: float = -math.inf):
        self.min = minimum
        self.max = maximum

    def surrounds(self, x: float) -> bool:
        return self.min < x < self.max

    def with_max(self, maximum: float) -> "Interval":
        return Interval(self.min, maximum)

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"
