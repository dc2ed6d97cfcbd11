"""Per-audit context shared between the orchestrator and its probes."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime

from utils.config import AuditSettings


class ProbeStatus(Enum):
    """Status of a probe's execution."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    DEGRADED = "degraded"


@dataclass
class ProbeAnalysis:
    """Result of one probe run, with diagnostics."""
    probe_name: str
    status: ProbeStatus = ProbeStatus.PENDING
    result: Optional[Any] = None  # Category, or the tech stack list
    errors: List[str] = field(default_factory=list)
    started_at: str = ""
    completed_at: str = ""
    duration_seconds: float = 0.0


@dataclass
class AuditContext:
    """
    State for a single audit run.

    Created by the orchestrator for each run and discarded afterwards.
    Probes only read `target_url` and `settings`; the orchestrator records
    each probe's ProbeAnalysis once the probe has returned.
    """
    target_url: str
    settings: AuditSettings = field(default_factory=AuditSettings)
    audit_date: str = field(default_factory=lambda: datetime.now().isoformat())

    analyses: Dict[str, ProbeAnalysis] = field(default_factory=dict)

    def get_analysis(self, probe_name: str) -> Optional[ProbeAnalysis]:
        """Get analysis by probe name."""
        return self.analyses.get(probe_name)

    def set_analysis(self, analysis: ProbeAnalysis):
        """Set analysis for a probe."""
        self.analyses[analysis.probe_name] = analysis

    def degraded_probes(self) -> List[str]:
        return [name for name, a in self.analyses.items() if a.status == ProbeStatus.DEGRADED]

    def get_summary(self) -> Dict:
        """Get a summary of the run state."""
        return {
            'website': self.target_url,
            'audit_date': self.audit_date,
            'probes_completed': sum(1 for a in self.analyses.values()
                                    if a.status == ProbeStatus.COMPLETED),
            'probes_degraded': self.degraded_probes(),
        }
