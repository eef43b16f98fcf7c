import json
import logging

from order_registry_service.app.utils.logging import (
    OrderJSONFormatter,
    setup_order_logging,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="order_registry_service.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="record saved successfully",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestOrderJSONFormatter:
    def test_standard_fields(self):
        entry = json.loads(OrderJSONFormatter().format(make_record()))

        assert entry["level"] == "INFO"
        assert entry["service"] == "order_registry_service"
        assert entry["logger"] == "order_registry_service.test"
        assert entry["message"] == "record saved successfully"
        assert "lineno" not in entry

    def test_extra_fields_are_included(self):
        entry = json.loads(OrderJSONFormatter().format(make_record(order_id="101")))

        assert entry["order_id"] == "101"

    def test_excluded_fields_are_dropped(self):
        formatter = OrderJSONFormatter(exclude_fields=["order_id"])

        entry = json.loads(formatter.format(make_record(order_id="101")))

        assert "order_id" not in entry


class TestSetupOrderLogging:
    def test_console_only(self):
        logger = setup_order_logging("order_registry_test_console", log_level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_logging_writes_main_and_error_logs(self, tmp_path):
        logger = setup_order_logging(
            "order_registry_test_files",
            enable_file_logging=True,
            log_dir=str(tmp_path),
        )
        logger.error("store failure")
        for handler in logger.handlers:
            handler.flush()

        assert (tmp_path / "order_registry_test_files.log").exists()
        errors = (tmp_path / "order_registry_test_files_errors.log").read_text()
        assert "store failure" in errors

        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
