import io
import json
import logging

import pytest

from bus_booking.config import ObservabilityConfig
from bus_booking.domain.models import AdminPayload
from bus_booking.monitoring import configure_logging


def test_structured_logging_includes_extra(restore_root_logger, service):
    stream = io.StringIO()
    configure_logging(ObservabilityConfig(level="INFO", structured=True), stream=stream)

    service.create_admin(AdminPayload(name="Jane", email="jane@example.com"))

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    created = [entry for entry in lines if entry["message"] == "Admin created"]
    assert created
    assert created[0]["admin_id"] == 1
    assert created[0]["level"] == "INFO"
    assert created[0]["logger"] == "bus_booking.services.booking_service"


def test_rejections_logged_with_kind(restore_root_logger, service):
    stream = io.StringIO()
    configure_logging(ObservabilityConfig(level="INFO", structured=True), stream=stream)

    with pytest.raises(Exception):
        service.create_admin(AdminPayload(name="", email=""))

    entries = [json.loads(line) for line in stream.getvalue().splitlines()]
    rejected = [e for e in entries if e["message"] == "Operation rejected"]
    assert rejected[0]["kind"] == "EmptyFields"
    assert rejected[0]["operation"] == "create_admin"


def test_plain_format_and_single_handler(restore_root_logger):
    stream = io.StringIO()
    config = ObservabilityConfig(level="WARNING", format="%(levelname)s:%(message)s")
    configure_logging(config, stream=stream)
    handler = configure_logging(config, stream=stream)

    root = logging.getLogger()
    assert [h for h in root.handlers if h.get_name() == handler.get_name()] == [handler]

    logging.getLogger("bus_booking.test").info("hidden")
    logging.getLogger("bus_booking.test").warning("shown")
    assert stream.getvalue() == "WARNING:shown\n"
