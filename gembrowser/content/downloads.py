"""
현재 페이지 원문을 다운로드 디렉터리에 저장
"""
import posixpath
import urllib.parse
from pathlib import Path

import structlog

from .page import Page

logger = structlog.get_logger(__name__)

DEFAULT_NAME = "index.gmi"


def filename_for(url: str) -> str:
    """URL 경로의 마지막 부분을 파일 이름으로 - 없으면 호스트 기반"""
    parsed = urllib.parse.urlsplit(url)
    name = posixpath.basename(parsed.path.rstrip("/")) if parsed.path.strip("/") else ""
    if not name:
        host = parsed.hostname or "page"
        return f"{host}_{DEFAULT_NAME}"
    return urllib.parse.unquote(name)


def unique_path(directory: Path, name: str) -> Path:
    path = directory / name
    if not path.exists():
        return path
    stem, suffix = path.stem, path.suffix
    i = 1
    while True:
        candidate = directory / f"{stem}({i}){suffix}"
        if not candidate.exists():
            return candidate
        i += 1


def download_page(page: Page, directory: Path) -> Path:
    """Page.raw 저장 후 경로 반환 - OSError는 호출자에게"""
    directory = Path(directory).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = unique_path(directory, filename_for(page.url))
    path.write_bytes(page.raw)
    logger.info("page_saved", url=page.url, path=str(path))
    return path
