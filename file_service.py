"""File download and fallback directory index for the catch-all route"""

import os
import html
import logging
import mimetypes
from typing import List, Tuple
from urllib.parse import quote

from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, Response

from directory_service import DirectoryService, NotFound

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
<ul>
{items}
</ul>
</body>
</html>
"""

class IoError(Exception):
    """A file or directory exists but could not be read"""

    def __init__(self, path: str, reason: str = "Failed to read file"):
        self.path = path
        super().__init__(reason)

class FileTransferService:
    def __init__(self, directory_service: DirectoryService):
        self.directory_service = directory_service

    def serve(self, path: str) -> Response:
        """Download a file, render a directory index, or return 404"""
        try:
            target = self.directory_service.resolve(path)
        except NotFound:
            return PlainTextResponse("Not Found", status_code=404)

        if os.path.isfile(target):
            return self.download(target)
        if os.path.isdir(target):
            return HTMLResponse(self.render_index(path, target))
        return PlainTextResponse("Not Found", status_code=404)

    def download(self, file_path: str) -> FileResponse:
        try:
            with open(file_path, "rb"):
                pass
        except OSError as e:
            logger.warning(f"Cannot open {file_path} for download: {e}")
            raise IoError(file_path) from e

        filename = os.path.basename(file_path)
        media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        logger.info(f"Sending file {file_path} ({media_type})")
        return FileResponse(file_path, media_type=media_type, filename=filename)

    def _link_stays_inside(self, link_path: str) -> bool:
        directories = self.directory_service
        if not directories.confine_to_root:
            return True
        return directories.contains(os.path.realpath(link_path))

    def _read_entries(self, dir_path: str) -> List[Tuple[str, bool]]:
        entries = []
        try:
            with os.scandir(dir_path) as it:
                for entry in it:
                    try:
                        entry.name.encode("utf-8")
                        if entry.is_symlink() and not self._link_stays_inside(entry.path):
                            continue
                        entries.append((entry.name, entry.is_dir()))
                    except (OSError, UnicodeEncodeError):
                        continue
        except OSError as e:
            logger.warning(f"Cannot read directory {dir_path} for index: {e}")
            raise IoError(dir_path, "Failed to read directory") from e
        return sorted(entries)

    def render_index(self, path: str, dir_path: str) -> str:
        base = path.strip("/")
        prefix = f"{base}/" if base else ""
        title = html.escape(f"Index of /{prefix}")

        items = []
        if base:
            parent = base.rsplit("/", 1)[0] if "/" in base else ""
            parent_href = "/" + quote(f"{parent}/" if parent else "")
            items.append(f'<li><a href="{parent_href}">../</a></li>')

        for name, is_dir in self._read_entries(dir_path):
            label = f"{name}/" if is_dir else name
            href = "/" + quote(prefix + label)
            items.append(f'<li><a href="{html.escape(href)}">{html.escape(label)}</a></li>')

        return INDEX_TEMPLATE.format(title=title, items="\n".join(items))
