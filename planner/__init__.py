"""
planner
-------

Main planning module. Initializes key components:

- `generator`: Session generation over the working-day calendar.
- `cascade`: Forward recalculation after a module or session is moved.
- `verifier`: Coherence checks (capacity, hour integrity, weekend/holiday policy).
- `metrics`: Dashboard summary of a plan.
- `builder`: One-call orchestration of the above.

Provides high-level access to core planning functionality.
"""
import utils.logger  # noqa: F401  (installs the `planner` log handlers)
from . import generator, cascade, verifier, metrics, builder
