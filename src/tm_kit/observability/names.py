# src/tm_kit/observability/names.py

"""Standard metric names for tm-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Parse Metrics
# ============================================================================

# Duration
PARSE_DURATION = "parse_duration"

# Counters
PARSE_REQUESTS_TOTAL = "parse_requests_total"
PARSE_ERRORS_TOTAL = "parse_errors_total"


# ============================================================================
# Registry Metrics
# ============================================================================

# Counters
REGISTRY_LOOKUPS_TOTAL = "registry_lookups_total"
REGISTRY_MISSES_TOTAL = "registry_misses_total"

# Gauges
REGISTRY_FACTORIES = "registry_factories"
