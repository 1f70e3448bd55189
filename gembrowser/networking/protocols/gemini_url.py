"""
gemini:// 요청

요청:  <URL>\r\n
응답:  <STATUS><SPACE><META>\r\n[BODY]
"""
import socket
import ssl
from dataclasses import dataclass

from .base_url import URL
from ...common.constants import GEMINI_PORT, MAX_RESPONSE_HEADER
from ...common.errors import FetchError


@dataclass
class GeminiResponse:
    status: int
    meta: str
    body: bytes = b""

    @property
    def category(self) -> int:
        """첫 자리 - 1 input, 2 success, 3 redirect, 4/5 failure, 6 certificate"""
        return self.status // 10


def parse_header(line: bytes):
    """응답 헤더 파싱 -> (status, meta)"""
    if not line.endswith(b"\r\n"):
        raise FetchError("Malformed response header: missing CRLF")
    try:
        header = line[:-2].decode("utf-8")
    except UnicodeDecodeError:
        raise FetchError("Malformed response header: not UTF-8")

    status, _, meta = header.partition(" ")
    if len(status) != 2 or not status.isdigit():
        raise FetchError(f"Malformed response header: {header!r}")
    if len(meta.encode("utf-8")) > 1024:
        raise FetchError("Malformed response header: meta too long")
    return int(status), meta.strip()


def _tls_context() -> ssl.SSLContext:
    # Gemini 서버는 대부분 자체 서명 인증서를 쓴다 (TOFU는 범위 밖)
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    return ctx


class GeminiURL(URL):
    default_port = GEMINI_PORT

    def _open_socket(self, timeout):
        s = socket.create_connection((self.host, self.port), timeout=timeout)
        return _tls_context().wrap_socket(s, server_hostname=self.host)

    def request(self, timeout=None) -> GeminiResponse:
        if not self.host:
            raise FetchError(f"URL has no host: {self.raw_url}")

        with self._open_socket(timeout) as s:
            s.sendall(f"{self}\r\n".encode("utf-8"))
            response = s.makefile("rb")
            try:
                status, meta = parse_header(response.readline(MAX_RESPONSE_HEADER))
                body = response.read() if status // 10 == 2 else b""
            finally:
                response.close()

        return GeminiResponse(status, meta, body)
