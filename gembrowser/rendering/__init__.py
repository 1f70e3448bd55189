# Rendering - 문서를 텍스트와 링크 목록으로
from .gemtext import GemtextRenderer, render

__all__ = ['GemtextRenderer', 'render']
