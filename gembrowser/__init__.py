# gembrowser
# 터미널 Gemini 브라우저의 탭/세션 네비게이션 코어

__version__ = "1.0.0"

# Re-export main classes for convenience
from .core.browser import Browser
from .core.session import Session
from .core.orchestrator import FetchOrchestrator
from .content.tab import Tab
from .content.history import History
from .content.page import Page

__all__ = ['Browser', 'Session', 'FetchOrchestrator', 'Tab', 'History', 'Page']
