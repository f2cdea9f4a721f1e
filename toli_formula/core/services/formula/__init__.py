"""
Release installer service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → domain → resolver → detection → execution →
orchestration)::

    from toli_formula.core.services.formula import run_install
"""

# ── Errors ──
from toli_formula.core.services.formula.errors import (  # noqa: F401
    ArtifactNotFoundError,
    DownloadError,
    FormulaError,
    IntegrityError,
    MalformedArchiveError,
    PlacementError,
    UnsupportedPlatformError,
)

# ── L1: Domain ──
from toli_formula.core.services.formula.domain.caveats import (  # noqa: F401
    render_caveats,
    report,
)

# ── L2: Resolver ──
from toli_formula.core.services.formula.resolver.artifact_location import (  # noqa: F401
    asset_name,
    locate,
    locate_all,
)
from toli_formula.core.services.formula.resolver.platform_resolution import (  # noqa: F401
    resolve,
)

# ── L3: Detection ──
from toli_formula.core.services.formula.detection.host import detect_host  # noqa: F401
from toli_formula.core.services.formula.detection.tool_version import (  # noqa: F401
    get_installed_version,
    verify,
)

# ── L4: Execution ──
from toli_formula.core.services.formula.execution.download import (  # noqa: F401
    compute_sha256,
)
from toli_formula.core.services.formula.execution.installer import install  # noqa: F401

# ── L5: Orchestration ──
from toli_formula.core.services.formula.orchestration.orchestrator import (  # noqa: F401
    InstallReport,
    run_install,
)
