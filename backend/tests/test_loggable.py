"""
Tests for the method-call logging interceptor.
"""

import asyncio
import logging
import re

import pytest

from constants import LogConfig
from utils.loggable import loggable, write_value_as_json
from utils.logging_utils import TRACE

TIMING = re.compile(r"^(\w+) \[(\d+)ms\]$")


def _records(caplog):
    return [r for r in caplog.records if r.name == __name__]


@loggable(debug=True)
def echo_debug(number, text):
    return "y"


@loggable()
def echo_info(value):
    return value


@loggable(debug=True)
async def echo_async(value):
    await asyncio.sleep(0)
    return value * 2


class Garage:
    @loggable()
    def park(self, car_id):
        return f"parked {car_id}"


def test_debug_method_is_silent_when_debug_disabled(caplog):
    caplog.set_level(logging.INFO, logger=__name__)

    assert echo_debug(1, "x") == "y"
    assert _records(caplog) == []


def test_trace_logs_arguments_result_and_timing(caplog):
    caplog.set_level(TRACE, logger=__name__)

    assert echo_debug(1, "x") == "y"

    records = _records(caplog)
    assert [r.levelno for r in records] == [TRACE, TRACE, logging.DEBUG]
    entry, exit_, timing = (r.getMessage() for r in records)
    assert entry == 'echo_debug <= [1, "x"]'
    assert exit_ == 'echo_debug => "y"'
    match = TIMING.match(timing)
    assert match and match.group(1) == "echo_debug"
    assert int(match.group(2)) >= 0


def test_non_debug_method_logs_timing_at_info_without_trace(caplog):
    caplog.set_level(logging.INFO, logger=__name__)

    assert echo_info(5) == 5

    records = _records(caplog)
    assert len(records) == 1
    assert records[0].levelno == logging.INFO
    assert TIMING.match(records[0].getMessage())


def test_unserializable_argument_uses_placeholder(caplog):
    caplog.set_level(TRACE, logger=__name__)
    marker = object()

    assert echo_info(marker) is marker

    entry = _records(caplog)[0].getMessage()
    assert entry == f"echo_info <= {LogConfig.UNSERIALIZABLE_PLACEHOLDER}"


def test_exception_propagates_unchanged(caplog):
    caplog.set_level(TRACE, logger=__name__)
    error = KeyError("missing")

    @loggable()
    def explode():
        raise error

    with pytest.raises(KeyError) as exc_info:
        explode()

    assert exc_info.value is error
    # Only the entry trace: no exit trace, no timing
    assert [r.levelno for r in _records(caplog)] == [TRACE]


def test_self_is_not_logged(caplog):
    caplog.set_level(TRACE, logger=__name__)

    assert Garage().park(7) == "parked 7"
    assert _records(caplog)[0].getMessage() == "park <= [7]"


def test_keyword_arguments_are_logged(caplog):
    caplog.set_level(TRACE, logger=__name__)

    echo_info(value=3)
    assert _records(caplog)[0].getMessage() == 'echo_info <= [{"value": 3}]'


def test_async_function_is_wrapped(caplog):
    caplog.set_level(logging.DEBUG, logger=__name__)

    assert asyncio.run(echo_async(21)) == 42

    records = _records(caplog)
    assert len(records) == 1
    assert records[0].levelno == logging.DEBUG
    assert records[0].getMessage().startswith("echo_async [")


def test_injected_logger_is_used(caplog):
    custom = logging.getLogger("hostocars.custom")
    caplog.set_level(logging.INFO, logger="hostocars.custom")

    @loggable(logger=custom)
    def ping():
        return "pong"

    ping()
    assert [r.name for r in caplog.records if r.name.startswith("hostocars")] == ["hostocars.custom"]


def test_level_is_checked_at_call_time(caplog):
    caplog.set_level(logging.INFO, logger=__name__)
    echo_debug(1, "x")
    assert _records(caplog) == []

    caplog.set_level(logging.DEBUG, logger=__name__)
    echo_debug(1, "x")
    assert len(_records(caplog)) == 1


def test_write_value_as_json_handles_pydantic_models():
    from schemas import ContactRead

    text = write_value_as_json(ContactRead(id=1, name="Garage", picture=b"\x00\x01"))
    assert '"id": 1' in text
    assert '"picture": "AAE="' in text
