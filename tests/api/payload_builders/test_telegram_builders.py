"""Testes para api.payload_builders.telegram.

Cobre: campos de destino, texto (sendMessage), documento (sendDocument)
e a fachada TelegramPayloadBuilder.
"""

from __future__ import annotations

import pytest

from api.payload_builders.telegram import (
    DocumentPayloadBuilder,
    TelegramPayloadBuilder,
    TextPayloadBuilder,
)
from api.payload_builders.telegram.base import destination_fields, parse_mode_value
from app.domain.channel import Channel
from app.domain.relay import FileRelay, MarkupMode, TextRelay
from utils.errors import ErrorCode, RelayError

OPS = Channel(destination_id="-100123", secret="s3cr3t", thread_id="7")
ALERTS = Channel(destination_id="-100999", secret="hunter2")


def _file_relay(**overrides: object) -> FileRelay:
    values: dict[str, object] = {
        "channel": "ops",
        "secret": "s3cr3t",
        "caption": "daily report",
        "file_bytes": b"%PDF-1.4",
        "size": 8,
        "file_name": "report.pdf",
        "mime_type": "application/pdf",
    }
    values.update(overrides)
    return FileRelay(**values)  # type: ignore[arg-type]


class TestDestinationFields:
    def test_includes_thread_when_channel_has_one(self) -> None:
        assert destination_fields(OPS) == {"chat_id": "-100123", "message_thread_id": "7"}

    def test_omits_thread_when_absent(self) -> None:
        assert destination_fields(ALERTS) == {"chat_id": "-100999"}


class TestParseModeValue:
    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (None, None),
            (MarkupMode.NONE, None),
            (MarkupMode.MARKDOWN, "Markdown"),
            (MarkupMode.MARKDOWN_V2, "MarkdownV2"),
            (MarkupMode.HTML, "HTML"),
        ],
    )
    def test_wire_value(self, mode: MarkupMode | None, expected: str | None) -> None:
        assert parse_mode_value(mode) == expected


class TestTextPayloadBuilder:
    def test_round_trip_payload(self) -> None:
        payload = TextPayloadBuilder().build(
            OPS, TextRelay(channel="ops", secret="s3cr3t", text="hello")
        )

        assert payload == {
            "chat_id": "-100123",
            "message_thread_id": "7",
            "text": "hello",
            "link_preview_options": {"is_disabled": False, "prefer_small_media": True},
        }

    def test_parse_mode_present_when_requested(self) -> None:
        payload = TextPayloadBuilder().build(
            ALERTS,
            TextRelay(channel="alerts", secret="x", text="<b>x</b>", markup_mode=MarkupMode.HTML),
        )

        assert payload["parse_mode"] == "HTML"
        assert "message_thread_id" not in payload

    def test_none_markup_mode_is_omitted(self) -> None:
        payload = TextPayloadBuilder().build(
            ALERTS,
            TextRelay(channel="alerts", secret="x", text="plain", markup_mode=MarkupMode.NONE),
        )

        assert "parse_mode" not in payload

    def test_empty_text_is_passed_through(self) -> None:
        payload = TextPayloadBuilder().build(ALERTS, TextRelay(channel="a", secret="x", text=""))
        assert payload["text"] == ""


class TestDocumentPayloadBuilder:
    def test_builds_fields_and_document(self) -> None:
        payload = DocumentPayloadBuilder(50_000_000).build(
            OPS, _file_relay(markup_mode=MarkupMode.MARKDOWN_V2)
        )

        assert payload.fields == {
            "chat_id": "-100123",
            "message_thread_id": "7",
            "caption": "daily report",
            "parse_mode": "MarkdownV2",
        }
        assert payload.document == ("report.pdf", b"%PDF-1.4", "application/pdf")

    def test_file_name_and_mime_type_are_optional(self) -> None:
        payload = DocumentPayloadBuilder(50_000_000).build(
            ALERTS, _file_relay(file_name=None, mime_type=None)
        )

        assert payload.document == (None, b"%PDF-1.4", None)
        assert "parse_mode" not in payload.fields

    def test_size_equal_to_limit_is_rejected(self) -> None:
        builder = DocumentPayloadBuilder(50_000_000)

        with pytest.raises(RelayError) as exc_info:
            builder.ensure_size(50_000_000)

        assert exc_info.value.code is ErrorCode.FILE_TOO_BIG
        assert exc_info.value.status == 400
        assert exc_info.value.debug == "max file size is 50MB"

    def test_size_just_below_limit_is_accepted(self) -> None:
        DocumentPayloadBuilder(50_000_000).ensure_size(49_999_999)

    def test_build_rechecks_size(self) -> None:
        with pytest.raises(RelayError):
            DocumentPayloadBuilder(10).build(OPS, _file_relay(size=10))

    def test_debug_uses_configured_limit(self) -> None:
        with pytest.raises(RelayError, match="max file size is 20MB"):
            DocumentPayloadBuilder(20_000_000).ensure_size(20_000_001)

    def test_debug_below_one_megabyte_is_in_bytes(self) -> None:
        with pytest.raises(RelayError) as exc_info:
            DocumentPayloadBuilder(512_000).ensure_size(600_000)

        assert exc_info.value.debug == "max file size is 512000 bytes"


class TestTelegramPayloadBuilder:
    def test_facade_delegates(self) -> None:
        builder = TelegramPayloadBuilder(max_file_size_bytes=100)

        text = builder.build_text(OPS, TextRelay(channel="ops", secret="s3cr3t", text="hi"))
        document = builder.build_document(OPS, _file_relay())

        assert text["text"] == "hi"
        assert document.fields["caption"] == "daily report"
        with pytest.raises(RelayError):
            builder.ensure_file_size(100)
