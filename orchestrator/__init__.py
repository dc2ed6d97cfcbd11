"""Orchestrator package for audit coordination."""

from .context_store import AuditContext, ProbeAnalysis, ProbeStatus
from .orchestrator import Orchestrator

__all__ = ['AuditContext', 'ProbeAnalysis', 'ProbeStatus', 'Orchestrator']
