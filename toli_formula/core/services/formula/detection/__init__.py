"""
L3 Detection — read system state, never write.
"""

from toli_formula.core.services.formula.detection.host import detect_host  # noqa: F401
from toli_formula.core.services.formula.detection.tool_version import (  # noqa: F401
    get_installed_version,
    verify,
)
