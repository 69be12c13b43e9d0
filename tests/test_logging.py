import logging

from loggingmanager import ContextFormatter, local_manager, set_user_id


def make_record():
    return logging.LogRecord("apps.talks", logging.INFO, __file__, 1, "Talk %s updated", (3,), None)


def test_context_formatter_adds_user():
    formatter = ContextFormatter("[%(user)s] %(message)s")

    set_user_id("x@example.com")
    try:
        record = make_record()
        assert formatter.format(record) == "[x@example.com] Talk 3 updated"
        assert record.user == "x@example.com"
    finally:
        local_manager.cleanup()

    record = make_record()
    assert formatter.format(record) == "[None] Talk 3 updated"
