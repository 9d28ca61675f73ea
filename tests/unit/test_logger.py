import logging

import pytest

from paperwork.logging.logger import Log


class TestBindDocument:
    def test_defaults_to_placeholder(self) -> None:
        assert Log.current_document() == "-"

    def test_binds_and_restores(self) -> None:
        with Log.bind_document("doc-1"):
            assert Log.current_document() == "doc-1"
            with Log.bind_document("doc-2"):
                assert Log.current_document() == "doc-2"
            assert Log.current_document() == "doc-1"
        assert Log.current_document() == "-"

    def test_records_carry_document_id(self, caplog: pytest.LogCaptureFixture) -> None:
        Log.configure("INFO")
        handler = Log._logger.handlers[0]
        with caplog.at_level(logging.INFO, logger="paperwork"), Log.bind_document("doc-7"):
            Log.info("hello")
            record = caplog.records[-1]
            handler.filter(record)

        assert record.document_id == "doc-7"
        assert "[doc-7] hello" in handler.format(record)
