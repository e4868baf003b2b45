"""Testes dos endpoints de relay via ASGI (sem rede)."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable

import httpx
import pytest

from app.app import create_app
from app.bootstrap.relay_factory import RelayContext
from tests.fakes.fake_telegram_backend import FakeTelegramBackend, make_relay_context

ClientFactory = Callable[..., Awaitable[httpx.AsyncClient]]


@pytest.fixture
async def client_for() -> AsyncIterator[ClientFactory]:
    contexts: list[RelayContext] = []

    async def _make(backend: FakeTelegramBackend, **context_kwargs: object) -> httpx.AsyncClient:
        context = make_relay_context(backend, **context_kwargs)  # type: ignore[arg-type]
        contexts.append(context)
        app = create_app(context)
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://relay")

    yield _make
    for context in contexts:
        await context.background.drain(timeout_seconds=1.0)
        await context.aclose()


class TestSend:
    @pytest.mark.asyncio
    async def test_success_returns_empty_200_and_forwards_payload(
        self, client_for: ClientFactory
    ) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend) as client:
            response = await client.post(
                "/send", json={"channel": "ops", "pass": "s3cr3t", "text": "hello"}
            )

        assert response.status_code == 200
        assert response.content == b""
        assert backend.last_json() == {
            "chat_id": "-100123",
            "message_thread_id": "7",
            "text": "hello",
            "link_preview_options": {"is_disabled": False, "prefer_small_media": True},
        }

    @pytest.mark.asyncio
    async def test_unknown_channel_and_bad_secret_are_indistinguishable(
        self, client_for: ClientFactory
    ) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend) as client:
            unknown = await client.post(
                "/send", json={"channel": "nope", "pass": "s3cr3t", "text": "x"}
            )
            bad_secret = await client.post(
                "/send", json={"channel": "ops", "pass": "wrong", "text": "x"}
            )

        expected = {"status": 404, "code": "not_found", "debug": "no channel"}
        assert unknown.status_code == bad_secret.status_code == 404
        assert unknown.json() == bad_secret.json() == expected
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_backend_rejection_is_send_failed_without_body_leak(
        self, client_for: ClientFactory
    ) -> None:
        backend = FakeTelegramBackend(
            status_code=400,
            body='{"ok":false,"error_code":400,"description":"Bad Request: chat not found"}',
        )
        async with await client_for(backend) as client:
            response = await client.post(
                "/send",
                json={"channel": "ops", "pass": "s3cr3t", "text": "*x", "parse_mode": "Markdown"},
            )

        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "code": "send_failed",
            "debug": "sending message to telegram failed",
        }
        assert "chat not found" not in response.text
        assert backend.last_json()["parse_mode"] == "Markdown"

    @pytest.mark.asyncio
    async def test_transport_error_is_server_error(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend(fail_with=httpx.ConnectError("refused"))
        async with await client_for(backend) as client:
            response = await client.post(
                "/send", json={"channel": "ops", "pass": "s3cr3t", "text": "x"}
            )

        assert response.status_code == 500
        assert response.json()["code"] == "server_error"

    @pytest.mark.asyncio
    async def test_missing_field_is_bad_request(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend) as client:
            response = await client.post("/send", json={"channel": "ops", "text": "x"})

        assert response.status_code == 400
        assert response.json()["code"] == "bad_request"
        assert "pass" in response.json()["debug"]
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_invalid_parse_mode_is_bad_request(self, client_for: ClientFactory) -> None:
        async with await client_for(FakeTelegramBackend()) as client:
            response = await client.post(
                "/send",
                json={"channel": "ops", "pass": "s3cr3t", "text": "x", "parse_mode": "BBCode"},
            )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_correlation_id_is_echoed(self, client_for: ClientFactory) -> None:
        async with await client_for(FakeTelegramBackend()) as client:
            response = await client.post(
                "/send",
                json={"channel": "ops", "pass": "s3cr3t", "text": "x"},
                headers={"x-correlation-id": "req-42"},
            )

        assert response.headers["x-correlation-id"] == "req-42"


class TestSendMultipart:
    @pytest.mark.asyncio
    async def test_form_text_is_relayed(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend) as client:
            response = await client.post(
                "/send-mp",
                data={
                    "channel": "alerts",
                    "pass": "hunter2",
                    "text": "disk full",
                    "parse_mode": "HTML",
                },
            )

        assert response.status_code == 200
        assert backend.last_json() == {
            "chat_id": "-100999",
            "text": "disk full",
            "parse_mode": "HTML",
            "link_preview_options": {"is_disabled": False, "prefer_small_media": True},
        }

    @pytest.mark.asyncio
    async def test_bad_secret_is_not_found(self, client_for: ClientFactory) -> None:
        async with await client_for(FakeTelegramBackend()) as client:
            response = await client.post(
                "/send-mp", data={"channel": "alerts", "pass": "nope", "text": "x"}
            )

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"


class TestSendFile:
    @pytest.mark.asyncio
    async def test_returns_200_while_backend_hangs(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend(hang=True)
        async with await client_for(backend) as client:
            response = await asyncio.wait_for(
                client.post(
                    "/send-file",
                    data={"channel": "ops", "pass": "s3cr3t", "text": "nightly dump"},
                    files={"file": ("dump.txt", b"payload bytes", "text/plain")},
                ),
                timeout=2.0,
            )

        assert response.status_code == 200
        assert response.content == b""
        await asyncio.wait_for(backend.received.wait(), timeout=1.0)
        assert backend.last_method() == "sendDocument"
        assert b"nightly dump" in backend.last_request.content
        assert b"payload bytes" in backend.last_request.content
        backend.release()

    @pytest.mark.asyncio
    async def test_caption_field_is_accepted(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend, file_dispatch_mode="inline") as client:
            response = await client.post(
                "/send-file",
                data={"channel": "ops", "pass": "s3cr3t", "caption": "from caption"},
                files={"file": ("a.txt", b"abc", "text/plain")},
            )

        assert response.status_code == 200
        assert b"from caption" in backend.last_request.content

    @pytest.mark.asyncio
    async def test_file_too_big_is_rejected_before_lookup(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend, max_file_size_bytes=10) as client:
            response = await client.post(
                "/send-file",
                data={"channel": "nope", "pass": "wrong", "text": "x"},
                files={"file": ("big.bin", b"0123456789", "application/octet-stream")},
            )

        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "code": "file_too_big",
            "debug": "max file size is 10 bytes",
        }
        await asyncio.sleep(0.01)
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_bad_secret_is_not_found_and_nothing_is_sent(
        self, client_for: ClientFactory
    ) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend) as client:
            response = await client.post(
                "/send-file",
                data={"channel": "ops", "pass": "wrong", "text": "x"},
                files={"file": ("a.txt", b"abc", "text/plain")},
            )

        assert response.status_code == 404
        await asyncio.sleep(0.01)
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_inline_mode_surfaces_backend_failure(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend(status_code=413, body="Request Entity Too Large")
        async with await client_for(backend, file_dispatch_mode="inline") as client:
            response = await client.post(
                "/send-file",
                data={"channel": "ops", "pass": "s3cr3t", "text": "x"},
                files={"file": ("a.txt", b"abc", "text/plain")},
            )

        assert response.status_code == 500
        assert response.json()["debug"] == "sending file to telegram failed"

    @pytest.mark.asyncio
    async def test_missing_file_is_bad_request(self, client_for: ClientFactory) -> None:
        async with await client_for(FakeTelegramBackend()) as client:
            response = await client.post(
                "/send-file", data={"channel": "ops", "pass": "s3cr3t", "text": "x"}
            )

        assert response.status_code == 400
        assert response.json()["code"] == "bad_request"

    @pytest.mark.asyncio
    async def test_missing_text_and_caption_is_bad_request(
        self, client_for: ClientFactory
    ) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend, file_dispatch_mode="inline") as client:
            response = await client.post(
                "/send-file",
                data={"channel": "ops", "pass": "s3cr3t"},
                files={"file": ("a.txt", b"abc", "text/plain")},
            )

        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "code": "bad_request",
            "debug": "invalid request: body.text",
        }
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_multipart_without_boundary_keeps_error_shape(
        self, client_for: ClientFactory
    ) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend) as client:
            response = await client.post(
                "/send-file",
                content=b"abc",
                headers={"content-type": "multipart/form-data"},
            )

        assert response.status_code == 400
        body = response.json()
        assert set(body) == {"status", "code", "debug"}
        assert body["status"] == 400
        assert body["code"] == "bad_request"
        assert backend.requests == []


class TestUploadLimit:
    @pytest.mark.asyncio
    async def test_declared_length_over_limit_is_rejected_before_parsing(
        self, client_for: ClientFactory
    ) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend, max_file_size_bytes=10) as client:
            response = await client.post(
                "/send-file",
                content=b"--b--\r\n",
                headers={
                    "content-type": "multipart/form-data; boundary=b",
                    "content-length": "5000000",
                },
            )

        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "code": "file_too_big",
            "debug": "max file size is 10 bytes",
        }
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_streamed_body_over_limit_is_cut_off(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend()
        chunks_sent = 0

        async def _oversized_upload() -> AsyncIterator[bytes]:
            nonlocal chunks_sent
            yield (
                b"--b\r\n"
                b'Content-Disposition: form-data; name="file"; filename="big.bin"\r\n'
                b"Content-Type: application/octet-stream\r\n\r\n"
            )
            for _ in range(5):
                chunks_sent += 1
                yield b"\0" * 500_000

        async with await client_for(backend, max_file_size_bytes=10) as client:
            response = await client.post(
                "/send-file",
                content=_oversized_upload(),
                headers={"content-type": "multipart/form-data; boundary=b"},
            )

        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "code": "file_too_big",
            "debug": "max file size is 10 bytes",
        }
        assert backend.requests == []
        assert chunks_sent < 5

    @pytest.mark.asyncio
    async def test_body_within_limit_passes_through(self, client_for: ClientFactory) -> None:
        backend = FakeTelegramBackend()
        async with await client_for(backend, file_dispatch_mode="inline") as client:
            response = await client.post(
                "/send-file",
                data={"channel": "ops", "pass": "s3cr3t", "text": "x"},
                files={"file": ("a.txt", b"abc", "text/plain")},
            )

        assert response.status_code == 200
        assert backend.last_method() == "sendDocument"


class TestFrameworkErrors:
    @pytest.mark.asyncio
    async def test_unknown_route_is_not_found_json(self, client_for: ClientFactory) -> None:
        async with await client_for(FakeTelegramBackend()) as client:
            response = await client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"status": 404, "code": "not_found", "debug": "Not Found"}
