"""
Gemtext 렌더러 - raw 문서를 주어진 폭의 텍스트와 링크 목록으로 변환

같은 입력과 폭에 대해 항상 같은 결과를 낸다.
"""
import textwrap
from typing import List, Tuple

from ..content.page import Mediatype
from ..profiling import MeasureTime

LINK_PREFIX = "=>"
PREFORMAT_TOGGLE = "```"


def _decode(raw) -> str:
    if isinstance(raw, str):
        return raw
    return raw.decode("utf-8", errors="replace")


def _wrap(text: str, width: int, initial: str = "", subsequent: str = "") -> List[str]:
    if not text.strip():
        return [initial.rstrip()]
    return textwrap.wrap(
        text,
        width=max(width, len(initial) + 1, len(subsequent) + 1),
        initial_indent=initial,
        subsequent_indent=subsequent,
        break_on_hyphens=False,
    ) or [""]


def _link_line(line: str) -> Tuple[str, str]:
    """'=> url label' -> (url, label)"""
    rest = line[len(LINK_PREFIX):].strip()
    parts = rest.split(maxsplit=1)
    if not parts:
        return "", ""
    url = parts[0]
    label = parts[1].strip() if len(parts) > 1 else url
    return url, label


class GemtextRenderer:
    def render(self, raw, width: int, mediatype: Mediatype = Mediatype.GEMINI) -> Tuple[str, List[str]]:
        with MeasureTime("render", "render"):
            text = _decode(raw).replace("\r\n", "\n")
            if mediatype == Mediatype.PLAIN:
                return text.rstrip("\n"), []
            return self._render_gemini(text, width)

    def _render_gemini(self, text: str, width: int) -> Tuple[str, List[str]]:
        out: List[str] = []
        links: List[str] = []
        preformatted = False

        for line in text.split("\n"):
            if line.startswith(PREFORMAT_TOGGLE):
                preformatted = not preformatted
                continue
            if preformatted:
                out.append(line)
                continue

            if line.startswith(LINK_PREFIX):
                url, label = _link_line(line)
                if not url:
                    out.append(line)
                    continue
                links.append(url)
                marker = f"[{len(links)}] "
                out.extend(_wrap(label, width, marker, " " * len(marker)))
            elif line.startswith("#"):
                out.extend(_wrap(line, width))
            elif line.startswith("* "):
                out.extend(_wrap(line[2:], width, "• ", "  "))
            elif line.startswith(">"):
                out.extend(_wrap(line[1:].strip(), width, "> ", "> "))
            else:
                out.extend(_wrap(line, width))

        while out and out[-1] == "":
            out.pop()
        return "\n".join(out), links


_default_renderer = GemtextRenderer()


def render(raw, width: int, mediatype: Mediatype = Mediatype.GEMINI) -> Tuple[str, List[str]]:
    return _default_renderer.render(raw, width, mediatype)
