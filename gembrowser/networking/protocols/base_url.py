"""Base URL class"""
from abc import ABC, abstractmethod

from ...navigation.links import parse_url


class URL(ABC):
    default_port = None

    def __init__(self, raw_url: str):
        parsed = parse_url(raw_url)
        self.raw_url = raw_url
        self.schema = parsed.scheme
        self.host = parsed.hostname or ""
        self.port = parsed.port or self.default_port
        self.path = parsed.path or "/"
        self.query = parsed.query

    def __str__(self):
        port_part = "" if self.port == self.default_port else f":{self.port}"
        query_part = f"?{self.query}" if self.query else ""
        return f"{self.schema}://{self.host}{port_part}{self.path}{query_part}"

    def origin(self):
        if self.port is None:
            return f"{self.schema}://{self.host}"
        return f"{self.schema}://{self.host}:{self.port}"

    @abstractmethod
    def request(self, timeout=None):
        pass
