"""
L2 Resolver — pure mapping from host → platform → artifact.
"""

from toli_formula.core.services.formula.resolver.artifact_location import (  # noqa: F401
    artifact_url,
    asset_name,
    locate,
    locate_all,
)
from toli_formula.core.services.formula.resolver.platform_resolution import (  # noqa: F401
    resolve,
)
