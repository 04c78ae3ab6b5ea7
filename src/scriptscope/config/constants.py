"""Configuration constants.

Defaults referenced by models.py plus values that are not user-configurable.
"""

# =============================================================================
# Parsing
# =============================================================================

SUPPORTED_EXTENSIONS = ("ts", "tsx", "js", "jsx", "mts", "cts", "mjs", "cjs", "vue")
"""Extensions accepted by parse_file."""

COMPONENT_EXTENSIONS = frozenset({"vue"})
"""Extensions routed to the single-file-component pipeline."""

DEFAULT_MAX_FILE_SIZE_MB = 5.0
"""Files above this size are rejected before parsing."""

# =============================================================================
# Pool
# =============================================================================

DEFAULT_POOL_MAX_PER_DIALECT = 4
"""Advisory number of cached parser handles per dialect."""

# =============================================================================
# Cache
# =============================================================================

DEFAULT_CACHE_MAX_ENTRIES = 100
DEFAULT_CACHE_TTL_SEC = 300.0

CACHE_KEY_LOG_PREFIX = 50
"""Cache keys are truncated to this many characters in log events."""

# =============================================================================
# Extraction
# =============================================================================

UNKNOWN_TYPE = "unknown"
"""Sentinel for an absent type annotation."""

ANONYMOUS_NAME = "anonymous"
"""Placeholder name for functions without a resolvable name."""
