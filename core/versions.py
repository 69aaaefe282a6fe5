APP_VERSION = "0.1.0"
ENGINE_VERSION = "2025-01.pmi1"
LAYOUT_VERSION = "0.1.0"
PARAMS_SCHEMA_VERSION = "v1"


# =============================================================================
# Version Catalog
# =============================================================================
# Name                   | Meaning                              | Changes when…
# ---------------------- | ------------------------------------ | -----------------------------------------------
# APP_VERSION            | overall app/package version          | you ship a release
# ENGINE_VERSION         | window + PMI semantics               | window membership or PMI definition changes
# LAYOUT_VERSION         | geometry produced by layout builders | constants, seeding or ordering rules change
# PARAMS_SCHEMA_VERSION  | request knobs shape                  | you add/remove/rename knobs or defaults
# =============================================================================
# Cache keys for collocation queries include ENGINE_VERSION, so bumping it
# invalidates memoized results held by long-lived processes.
# =============================================================================
