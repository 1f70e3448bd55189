# Core browser functionality
from .session import Session
from .orchestrator import FetchOrchestrator
from .browser import Browser

__all__ = ['Session', 'FetchOrchestrator', 'Browser']
