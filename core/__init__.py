"""
core
----

Core planning components:

- Module, ShiftConfig, Session, ModuleSchedule, RegionSelection:
  Immutable domain values shared by every engine.

- holidays:
  National, regional and island holiday tables and the excluded-date resolver.

- CoherenceRule, Issue & define_coherence_rules:
  Declare the coherence checks run by the verifier and the issues they report.

- ConstraintManager:
  Register and apply coherence checks in a controlled sequence.
"""
