"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE: temp downloads, archive extraction, and files
under the destination prefix.
"""

from toli_formula.core.services.formula.execution.archive import (  # noqa: F401
    ExtractedRelease,
    extract_release,
)
from toli_formula.core.services.formula.execution.download import (  # noqa: F401
    compute_sha256,
    fetch_artifact,
    verify_checksum,
)
from toli_formula.core.services.formula.execution.installer import install  # noqa: F401
from toli_formula.core.services.formula.execution.placement import (  # noqa: F401
    completion_destination,
    executable_destination,
    place_file,
)
