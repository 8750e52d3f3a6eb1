class RatioError(ArithmeticError):
    """Base class of every error raised by the ratio and float-decomposition modules."""


class ZeroDenominatorError(RatioError, ZeroDivisionError):
    def __init__(self, message: str = "Ratio denominator cannot be zero."):
        super().__init__(message)


class DivideByZeroError(RatioError, ZeroDivisionError):
    def __init__(self, message: str = "Attempted to find the reciprocal of zero."):
        super().__init__(message)


class RatioOverflowError(RatioError, OverflowError):
    """Raised when a bounded component cannot be negated (it is the minimum of its width)."""


class ArithmeticDomainError(RatioError, ValueError):
    """Raised when a value has no exact rational counterpart (NaN)."""


class BaseOutOfRangeError(RatioError, ValueError):
    def __init__(self, base: int):
        super().__init__(f"Base must be at least 2, got {base}.")
        self.base = base
