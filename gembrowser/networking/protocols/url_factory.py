from .base_url import URL
from .gemini_url import GeminiURL
from ...common.constants import GEMINI_SCHEME
from ...common.errors import FetchError
from ...navigation.links import parse_url


class URLFactory:
    @staticmethod
    def parse(url: str) -> URL:
        """절대 URL 문자열 -> URL 객체 (URLError / 지원하지 않는 스킴은 FetchError)"""
        schema = parse_url(url).scheme
        if schema == GEMINI_SCHEME:
            return GeminiURL(url)
        raise FetchError(f"Unsupported scheme: {schema or '(none)'}")
