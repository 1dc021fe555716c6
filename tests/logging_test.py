import json

import structlog

from novelai_image.core.logging import configure_logging


def test_json_logs_include_bound_context(capsys):
    configure_logging(json_logs=True, log_level="DEBUG")
    try:
        logger = structlog.get_logger()
        with structlog.contextvars.bound_contextvars(correlation_id="Ab12Cd"):
            logger.info("generation_request_submitted", model="nai-diffusion-4-5-full")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
    finally:
        structlog.reset_defaults()

    assert event["event"] == "generation_request_submitted"
    assert event["correlation_id"] == "Ab12Cd"
    assert event["level"] == "info"
    assert "trace_id" not in event


def test_log_level_filters_debug(capsys):
    configure_logging(json_logs=True, log_level="WARNING")
    try:
        structlog.get_logger().debug("archive_decoded", images=2)
        out = capsys.readouterr().out
    finally:
        structlog.reset_defaults()

    assert out == ""
