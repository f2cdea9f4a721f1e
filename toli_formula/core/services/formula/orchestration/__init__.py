"""
L5 Orchestration — top-level coordinators.
"""

from toli_formula.core.services.formula.orchestration.orchestrator import (  # noqa: F401
    InstallReport,
    run_install,
)
