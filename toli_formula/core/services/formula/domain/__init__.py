"""
L1 Domain — pure functions: no I/O, no subprocess.
"""

from toli_formula.core.services.formula.domain.caveats import (  # noqa: F401
    render_caveats,
    report,
)
from toli_formula.core.services.formula.domain.checksum import (  # noqa: F401
    digests_match,
    is_sha256_hex,
)
