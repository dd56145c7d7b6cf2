"""
Content Loader Module

Lazy, size-guarded, classification-aware loading of file content.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional

from .backing import BackingAdapter
from .classification import classify, is_binary
from .node import NativeBacking
from .references import DisplayReferences
from studiofs.core.config_loader import get_config
from studiofs.exceptions import TooLargeError
from studiofs.logger import Logger, get_logger


def decode_text(raw: bytes) -> str:
    """Decode file bytes for the editor, replacing invalid sequences."""
    return raw.decode('utf-8', errors='replace')


class ContentLoader:
    """
    Content Loader.

    On first access to a native file without resident content:
    1. Binary/media classes get an opaque display reference, without a read
    2. Text-like files are read; above the size limit the sentinel message
       replaces the content, otherwise the bytes are decoded
    3. The result is cached on the node

    Example:
        >>> loader = ContentLoader(adapter, references)
        >>> text = await loader.ensure_loaded('root_README.md')
    """

    def __init__(
        self,
        adapter: BackingAdapter,
        references: DisplayReferences,
        max_bytes: Optional[int] = None,
        too_large_message: Optional[str] = None
    ):
        config = get_config()
        self._adapter = adapter
        self._references = references
        self._max_bytes = max_bytes if max_bytes is not None else config.content.max_text_bytes
        self._too_large_message = (
            too_large_message if too_large_message is not None
            else config.content.too_large_message
        )
        self._logger = get_logger('loader')

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @property
    def too_large_message(self) -> str:
        return self._too_large_message

    async def ensure_loaded(self, node_id: str) -> Optional[str]:
        """
        Make a file's content resident and return it.

        Returns:
            The content, or None for folders

        Raises:
            NodeNotFoundError: If the node does not exist
            HostIOError: If the host read failed; the node stays unloaded
        """
        tree = self._adapter.tree
        node = tree.get(node_id)

        if not node.is_file:
            return None

        # Only native files can be without resident content
        if node.content is not None or not isinstance(node.backing, NativeBacking):
            return node.content

        too_large = False
        if is_binary(node.classification):
            content = self._references.register(node.backing.handle, node.classification)
        else:
            raw = await self._adapter.read(node_id)
            content = self.decode_bytes(node.name, raw, classification=node.classification)
            too_large = self.exceeds_limit(raw)

        tree.cache_content(node_id, content, too_large=too_large)
        self._logger.debug("Loaded content", context={'id': node_id, 'length': len(content)})
        return content

    def decode_bytes(self, name: str, raw: bytes, classification: Optional[str] = None) -> str:
        """
        Turn raw file bytes into display content.

        Binary/media bytes become a display reference; text above the size
        limit becomes the sentinel message without being decoded.
        """
        classification = classification or classify(name)

        if is_binary(classification):
            return self._references.register(raw, classification)

        try:
            self._check_size(name, len(raw))
        except TooLargeError as e:
            self._logger.info("Content too large to display", context=e.context)
            return self._too_large_message

        return decode_text(raw)

    def exceeds_limit(self, raw: bytes) -> bool:
        """True when ``raw`` is too large to be shown as text."""
        return len(raw) > self._max_bytes

    def _check_size(self, name: str, size: int) -> None:
        if size > self._max_bytes:
            raise TooLargeError(name, size=size, limit=self._max_bytes)
