"""
Method-call logging interceptor.

`loggable` wraps a function so that each call is timed and, at TRACE level,
logged with its arguments and result:

    @loggable(debug=True)
    def get_car(self, car_id: int) -> CarRead:
        ...

produces `get_car <= [42]`, `get_car => {...}` (TRACE) and `get_car [3ms]`
(DEBUG, or INFO when `debug` is False). A method flagged `debug=True` runs
unlogged while its logger is not enabled for DEBUG.
"""

import inspect
import json
import logging
import time
from functools import wraps
from typing import Callable, Optional

from fastapi.encoders import jsonable_encoder

from constants import LogConfig
from utils.logging_utils import TRACE


def write_value_as_json(value) -> str:
    """Diagnostic JSON form of a value, or a fixed placeholder when it cannot be encoded."""
    try:
        return json.dumps(jsonable_encoder(value), ensure_ascii=False)
    except Exception:
        return LogConfig.UNSERIALIZABLE_PLACEHOLDER


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def loggable(debug: bool = False, logger: Optional[logging.Logger] = None):
    """
    Decorator logging calls of the wrapped function.

    Args:
        debug: Time the call at DEBUG instead of INFO, and skip all logging
            when DEBUG is disabled
        logger: Logger to use; defaults to the logger of the function's module

    Returns:
        Decorated function with unchanged return value and exceptions
    """
    def decorator(func: Callable):
        method_name = func.__name__
        log = logger or logging.getLogger(func.__module__)
        params = list(inspect.signature(func).parameters)
        skip_first = bool(params) and params[0] in ('self', 'cls')
        timing_level = logging.DEBUG if debug else logging.INFO

        def call_arguments(args, kwargs):
            values = list(args[1:] if skip_first else args)
            if kwargs:
                values.append(kwargs)
            return values

        def is_active() -> bool:
            return not debug or log.isEnabledFor(logging.DEBUG)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            if not is_active():
                return await func(*args, **kwargs)

            trace_enabled = log.isEnabledFor(TRACE)
            if trace_enabled:
                log.log(TRACE, "%s <= %s", method_name, write_value_as_json(call_arguments(args, kwargs)))

            start = time.perf_counter()
            result = await func(*args, **kwargs)
            elapsed = _elapsed_ms(start)

            if trace_enabled:
                log.log(TRACE, "%s => %s", method_name, write_value_as_json(result))
            log.log(timing_level, "%s [%dms]", method_name, elapsed)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            if not is_active():
                return func(*args, **kwargs)

            trace_enabled = log.isEnabledFor(TRACE)
            if trace_enabled:
                log.log(TRACE, "%s <= %s", method_name, write_value_as_json(call_arguments(args, kwargs)))

            start = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed = _elapsed_ms(start)

            if trace_enabled:
                log.log(TRACE, "%s => %s", method_name, write_value_as_json(result))
            log.log(timing_level, "%s [%dms]", method_name, elapsed)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
