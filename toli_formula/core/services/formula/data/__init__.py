"""
L0 Data — static tables for the installer.
"""

from toli_formula.core.services.formula.data.destinations import (  # noqa: F401
    BIN_DIR,
    COMPLETION_DESTINATIONS,
)
from toli_formula.core.services.formula.data.platforms import (  # noqa: F401
    PLATFORMS,
    PlatformTarget,
)
from toli_formula.core.services.formula.data.releases import (  # noqa: F401
    PLACEHOLDER_SHA256,
    TOLI_RELEASE,
)
