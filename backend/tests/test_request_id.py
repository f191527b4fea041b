"""
Notekeeper Backend — Request ID Tests
=======================================

What we test:
    ✅ Acceptable client IDs are reused, anything else is replaced
    ✅ The log filter stamps records with the current request ID
    ✅ The header and 500 bodies carry the same ID
"""

import logging

import pytest

from notekeeper.middleware.request_id import (
    RequestIDLogFilter,
    request_id_var,
    resolve_request_id,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("notekeeper.test", logging.INFO, __file__, 1, "msg", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestResolveRequestId:

    @pytest.mark.parametrize("value", ["abc123", "trace-7.f_2", "a" * 64])
    def test_client_token_reused(self, value):
        assert resolve_request_id(value) == value

    @pytest.mark.parametrize("value", [None, "", "a" * 65, "has space", "bad\nline", "<b>"])
    def test_unacceptable_value_replaced(self, value):
        rid = resolve_request_id(value)
        assert rid != value
        assert len(rid) == 8


class TestRequestIDLogFilter:

    def test_uses_context_value(self):
        token = request_id_var.set("rid-42")
        try:
            record = _record()
            assert RequestIDLogFilter().filter(record) is True
            assert record.request_id == "rid-42"
        finally:
            request_id_var.reset(token)

    def test_dash_outside_request(self):
        token = request_id_var.set("")
        try:
            record = _record()
            RequestIDLogFilter().filter(record)
            assert record.request_id == "-"
        finally:
            request_id_var.reset(token)

    def test_explicit_extra_kept(self):
        record = _record(request_id="from-extra")
        RequestIDLogFilter().filter(record)
        assert record.request_id == "from-extra"


class TestRequestIDOverHttp:

    @pytest.mark.asyncio
    async def test_bad_header_replaced(self, test_client):
        r = await test_client.get("/", headers={"X-Request-ID": "not valid!"})
        assert r.headers["X-Request-ID"] != "not valid!"
        assert len(r.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_fault_body_matches_header(self, test_client, failing_store):
        from notekeeper.main import app
        from notekeeper.routes.notes import get_note_store

        app.dependency_overrides[get_note_store] = lambda: failing_store

        r = await test_client.get("/")

        assert r.status_code == 500
        assert r.json()["request_id"] == r.headers["X-Request-ID"]
