"""Probe package for the individual audit checks."""

from .base_probe import BaseProbe
from .security_probe import SecurityProbe
from .privacy_probe import PrivacyProbe
from .tech_probe import TechStackProbe
from .page_analysis import PageAnalysisAdapter

__all__ = [
    'BaseProbe',
    'SecurityProbe',
    'PrivacyProbe',
    'TechStackProbe',
    'PageAnalysisAdapter',
]
