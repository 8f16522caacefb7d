"""Local file storage for downloaded assets.

This module turns a downloaded buffer into a file on disk plus a
``File`` node parented to the record node that referenced it.
"""

from __future__ import annotations

from core.config import SourceConfig
from core.constants import DEFAULT_FILE_EXTENSION, FILE_NODE_TYPE, FILES_DIR_NAME
from core.errors import SourceStoreError
from core.logging_config import get_logger
from core.types import ContentNode
from ingest.ports import NodeSink
from transforms.node_identity import canonical_json

_LOGGER = get_logger(__name__)

_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", ".png"),
    (b"\xff\xd8\xff", ".jpg"),
    (b"GIF87a", ".gif"),
    (b"GIF89a", ".gif"),
    (b"%PDF", ".pdf"),
)


class LocalFileStore:
    """Content-addressed asset files under the data root."""

    def __init__(self, config: SourceConfig, sink: NodeSink) -> None:
        self._files_dir = config.data_root / FILES_DIR_NAME
        self._sink = sink

    def store_buffer(self, buffer: bytes, parent_id: str) -> str | None:
        """Write a buffer to disk and create its file node.

        Args:
            buffer: Downloaded asset bytes.
            parent_id: Record node id that owns the asset.

        Returns:
            File node id, or None for an empty buffer.

        Raises:
            SourceStoreError: If the file cannot be written.
        """
        if not buffer:
            return None
        digest = self._sink.create_content_digest(buffer)
        extension = detect_extension(buffer)
        file_path = self._files_dir / f"{digest}{extension}"
        try:
            self._files_dir.mkdir(parents=True, exist_ok=True)
            if not file_path.exists():
                file_path.write_bytes(buffer)
        except OSError as error:
            raise SourceStoreError(f"Failed to write asset file {file_path}: {error}") from error
        data = {
            "absolutePath": str(file_path),
            "base": file_path.name,
            "extension": extension.lstrip("."),
            "size": len(buffer),
        }
        node = ContentNode(
            id=self._sink.create_node_id(f"{FILE_NODE_TYPE}-{parent_id}-{digest}"),
            node_type=FILE_NODE_TYPE,
            data=data,
            content=canonical_json(data),
            content_digest=digest,
            parent=parent_id,
        )
        self._sink.create_node(node)
        _LOGGER.debug("file_stored", path=str(file_path), parent_id=parent_id, size=len(buffer))
        return node.id


def detect_extension(buffer: bytes) -> str:
    """Guess a file extension from leading magic bytes."""
    for signature, extension in _SIGNATURES:
        if buffer.startswith(signature):
            return extension
    if buffer[:4] == b"RIFF" and buffer[8:12] == b"WEBP":
        return ".webp"
    if b"<svg" in buffer[:512].lower():
        return ".svg"
    return DEFAULT_FILE_EXTENSION
