"""Build-time content loader reading JSON files from the content directory."""

import json
from pathlib import Path
from typing import Any, Optional

from config import settings
from .base import ContentLoader


class FileContentLoader(ContentLoader):
    """Reads `{content_dir}/{collection}/{name}.json` from local disk."""

    def __init__(self, content_dir: Optional[str] = None):
        """Initialize the loader.

        Args:
            content_dir: Directory holding projects/ and knowledge/.
                         Defaults to config setting.
        """
        self.content_dir = Path(content_dir) if content_dir else settings.get_content_path()

    @property
    def source(self) -> str:
        return str(self.content_dir)

    def document_path(self, collection: str, name: str) -> Path:
        """Path of a content document.

        Raises:
            ValueError: If the name would escape the collection directory.
        """
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Invalid content name: {name!r}")
        return self.content_dir / collection / f"{name}.json"

    def read_document(self, collection: str, name: str) -> Any:
        path = self.document_path(collection, name)
        return json.loads(path.read_text(encoding="utf-8"))
