"""Builder para envio de documentos (sendDocument, multipart)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.payload_builders.telegram.base import destination_fields, parse_mode_value
from app.protocols import DocumentPayload
from utils.errors import ErrorCode, RelayError

if TYPE_CHECKING:
    from app.domain.channel import Channel
    from app.domain.relay import FileRelay


def file_too_big_error(max_file_size_bytes: int) -> RelayError:
    """Erro file_too_big com o teto em MB, ou em bytes abaixo de 1MB."""
    if max_file_size_bytes >= 1_000_000:
        limit = f"{max_file_size_bytes // 1_000_000}MB"
    else:
        limit = f"{max_file_size_bytes} bytes"
    return RelayError(ErrorCode.FILE_TOO_BIG, f"max file size is {limit}")


class DocumentPayloadBuilder:
    """Builder de corpo multipart para sendDocument.

    Args:
        max_file_size_bytes: Teto de tamanho; arquivos com size >= teto
            são rejeitados antes de qualquer parte ser construída.
    """

    def __init__(self, max_file_size_bytes: int) -> None:
        self._max_file_size_bytes = max_file_size_bytes

    @property
    def max_file_size_bytes(self) -> int:
        return self._max_file_size_bytes

    def ensure_size(self, size: int) -> None:
        """Raises RelayError(file_too_big) se size >= teto."""
        if size >= self._max_file_size_bytes:
            raise file_too_big_error(self._max_file_size_bytes)

    def build(self, channel: Channel, request: FileRelay) -> DocumentPayload:
        """Constrói payload multipart do documento.

        Partes: document (binária, com nome e content-type quando
        informados), chat_id, caption, parse_mode e message_thread_id
        opcionais.
        """
        self.ensure_size(request.size)

        fields = destination_fields(channel)
        fields["caption"] = request.caption
        parse_mode = parse_mode_value(request.markup_mode)
        if parse_mode is not None:
            fields["parse_mode"] = parse_mode

        return DocumentPayload(
            fields=fields,
            document=(request.file_name or None, request.file_bytes, request.mime_type or None),
        )
