"""
Test Suite for Chat Export Parsing

Tests parsing of exported WhatsApp lines into ChatMessage records with
extracted listing fields.
"""

import logging

import pytest

from aqar.extraction import ChatMessage, PropertyType, Purpose, parse_chat_export, parse_message


class TestParseMessage:
    """Test single-line parsing."""

    def test_bracketed_with_seconds_and_meridiem(self):
        message = parse_message("[1/7/25, 10:30:25 AM] Ahmed Broker: شقة للبيع 01112345678")

        assert isinstance(message, ChatMessage)
        assert message.sender == "Ahmed Broker"
        assert message.message == "شقة للبيع 01112345678"
        assert message.timestamp == "1/7/25 10:30:25 AM"
        assert message.fields.broker_mobile == "01112345678"

    def test_without_seconds(self):
        message = parse_message("[12/11/2024, 9:05] Sara: مطلوب فيلا")

        assert message.timestamp == "12/11/2024 9:05"
        assert message.fields.purpose == Purpose.WANTED

    def test_without_brackets(self):
        message = parse_message("1/7/25, 10:30 Mohamed: hello")

        assert message.sender == "Mohamed"

    @pytest.mark.parametrize("line", [
        "",
        None,
        "Messages and calls are end-to-end encrypted.",
        "continued line without a header",
    ])
    def test_non_message_lines(self, line):
        assert parse_message(line) is None

    def test_to_dict_merges_fields(self):
        row = parse_message("[1/7/25, 10:30] Sara: فيلا للبيع").to_dict()

        assert row["sender"] == "Sara"
        assert row["property_type"] == "villa"
        assert row["purpose"] == "sale"


class TestParseChatExport:
    """Test whole-file parsing."""

    def test_parses_messages_in_order(self, chat_export):
        messages = parse_chat_export(chat_export)

        assert [m.sender for m in messages] == ["Ahmed Broker", "Sara", "Mohamed"]

    def test_extracts_fields_per_message(self, chat_export):
        first, second, third = parse_chat_export(chat_export)

        assert first.fields.area == "مدينة نصر"
        assert first.fields.property_type == PropertyType.APARTMENT
        assert second.fields.purpose == Purpose.WANTED
        assert second.fields.area == "التجمع الخامس"
        assert third.fields.area == "Sheikh Zayed"
        assert third.fields.property_type == PropertyType.VILLA

    def test_empty_content(self):
        assert parse_chat_export("") == []
        assert parse_chat_export(None) == []

    def test_logs_summary(self, chat_export, caplog):
        with caplog.at_level(logging.INFO, logger="aqar.extraction.whatsapp"):
            parse_chat_export(chat_export)

        assert "3 messages parsed, 2 lines skipped" in caplog.text

    def test_logs_progress_every_hundred(self, caplog):
        content = "\n".join(f"[1/7/25, 10:{i % 60:02d}] User{i}: شقة" for i in range(200))

        with caplog.at_level(logging.INFO, logger="aqar.extraction.whatsapp"):
            messages = parse_chat_export(content)

        assert len(messages) == 200
        assert "Processed 100 messages so far" in caplog.text
        assert "Processed 200 messages so far" in caplog.text
