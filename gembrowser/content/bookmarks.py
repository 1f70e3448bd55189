"""
북마크 저장소 - url -> 이름, YAML 파일에 보관
"""
import threading
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import structlog
import yaml

logger = structlog.get_logger(__name__)


class Bookmarks:
    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self._items: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.load()

    def load(self):
        if self.path is None or not self.path.exists():
            return
        with open(self.path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid bookmarks file: {self.path}")
        with self._lock:
            self._items = {str(url): str(name) for url, name in data.items()}

    def save(self):
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            items = dict(self._items)
        with open(self.path, "w") as f:
            yaml.safe_dump(items, f, allow_unicode=True, sort_keys=True)

    def add(self, url: str, name: str = ""):
        with self._lock:
            self._items[url] = name or url
        self.save()
        logger.info("bookmark_added", url=url)

    def remove(self, url: str) -> bool:
        with self._lock:
            removed = self._items.pop(url, None) is not None
        if removed:
            self.save()
        return removed

    def get(self, url: str) -> Optional[str]:
        return self._items.get(url)

    def all(self) -> List[Tuple[str, str]]:
        """이름순 (url, name) 목록"""
        with self._lock:
            return sorted(self._items.items(), key=lambda item: item[1].lower())

    def __len__(self):
        return len(self._items)

    def __contains__(self, url):
        return url in self._items

    def to_gemtext(self) -> str:
        lines = ["# Bookmarks", ""]
        items = self.all()
        if not items:
            lines.append("You have no bookmarks. Press Ctrl-D on a page to add one.")
        for url, name in items:
            lines.append(f"=> {url} {name}")
        return "\n".join(lines) + "\n"
