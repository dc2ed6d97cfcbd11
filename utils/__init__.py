"""Utilities package for the site audit tool."""

from .errors import AuditError, ValidationError, SessionError, FetchError, AnalysisEngineError, AuditFailure
from .config import AuditSettings, load_env_file
from .scoring import Issue, Category, Priority, AuditReport, ScoringRule, apply_rules
from .fetcher import PageFetcher, FetchResult
from .browser import BrowserSession, BrowserSessionProvider
from .lighthouse import LighthouseRunner
from .report import generate_html_report

__all__ = [
    'AuditError', 'ValidationError', 'SessionError', 'FetchError', 'AnalysisEngineError', 'AuditFailure',
    'AuditSettings', 'load_env_file',
    'Issue', 'Category', 'Priority', 'AuditReport', 'ScoringRule', 'apply_rules',
    'PageFetcher', 'FetchResult',
    'BrowserSession', 'BrowserSessionProvider',
    'LighthouseRunner',
    'generate_html_report',
]
