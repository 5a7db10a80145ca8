import io
import logging

from halwire.core.logging import LogfmtFormatter, setup_logging
from halwire.core.observability import log_event


def _record(msg, **extra):
    record = logging.LogRecord("halwire.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_log_event_carries_fields(caplog):
    caplog.set_level(logging.INFO, logger="halwire.observability")
    log_event("link_resolved", rel="x:foo", status=200)
    record = next(r for r in caplog.records if r.getMessage() == "link_resolved")
    assert record.name == "halwire.observability"
    assert record.event == "link_resolved"
    assert record.rel == "x:foo"
    assert record.status == 200


def test_log_event_drops_reserved_keys(caplog):
    caplog.set_level(logging.INFO, logger="halwire.observability")
    log_event("evt", name="clash", msg="clash", lineno=3, href="/a")
    record = next(r for r in caplog.records if r.getMessage() == "evt")
    assert record.name == "halwire.observability"
    assert record.href == "/a"


def test_log_event_uses_given_logger(caplog):
    caplog.set_level(logging.INFO, logger="halwire.custom")
    log_event("evt", logger=logging.getLogger("halwire.custom"))
    assert any(r.name == "halwire.custom" for r in caplog.records)


def test_logfmt_formatter_renders_known_extras():
    line = LogfmtFormatter().format(
        _record("Fetching resource", rel="x:foo", href="http://example.com/a b", status=200)
    )
    assert line == (
        'level=info logger=halwire.test event="Fetching resource" rel=x:foo '
        'href="http://example.com/a b" status=200'
    )


def test_logfmt_formatter_joins_lists():
    line = LogfmtFormatter().format(_record("parsed", rels=["self", "item"], hops=0))
    assert line == "level=info logger=halwire.test event=parsed rels=self,item hops=0"


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    stream = io.StringIO()
    try:
        setup_logging("debug", stream=stream)
        setup_logging("debug", stream=stream)
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        logging.getLogger("halwire.test").debug("hello", extra={"rel": "item"})
        assert stream.getvalue().strip() == "level=debug logger=halwire.test event=hello rel=item"
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
