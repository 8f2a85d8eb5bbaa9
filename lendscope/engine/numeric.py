"""Decimal coercion and fail-safe wrappers for the rate and risk engines."""

import functools
import logging
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Callable, TypeVar

from lendscope.core.errors import ComputationError

T = TypeVar("T")


def to_decimal(value: Any) -> Decimal:
    """Coerce a number or numeric string to a finite Decimal.

    Raises:
        ComputationError: If the value is missing, unparseable, NaN or infinite
    """
    if value is None:
        raise ComputationError("Missing numeric value")
    if isinstance(value, bool):
        raise ComputationError(f"Boolean is not a numeric value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ComputationError(f"Invalid numeric value: {value!r}") from e
    if not result.is_finite():
        raise ComputationError(f"Non-finite numeric value: {value!r}")
    return result


def fail_safe(fallback: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Make a computation total.

    Computation errors are logged and replaced by ``fallback``. When the
    fallback is callable it is invoked to build a fresh value.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (ComputationError, ArithmeticError, AttributeError, TypeError, ValueError) as e:
                logger.warning(f"{func.__qualname__} failed, returning fallback: {e}")
                return fallback() if callable(fallback) else fallback

        return wrapper

    return decorator


def plain_decimal(value: Decimal) -> Decimal:
    """Strip trailing zeros without switching to exponent notation."""
    value = value.normalize()
    if value.is_zero():
        return Decimal("0")
    if value.as_tuple().exponent > 0:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, value.adjusted() + 1)
            return value.quantize(Decimal("1"))
    return value
