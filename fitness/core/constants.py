"""Application constants."""

# Ordered collections: indices are shifted by this offset before renumbering
# so no final position collides with a value still present.
INDEX_OFFSET = 1_000_000

# Set-group defaults
DEFAULT_REST_DURATION_SECONDS = 150

# Templates
TEMPLATE_NAME_MAX_LENGTH = 100
TEMPLATES_PAGE_SIZE = 10

EXERCISE_NAME_MAX_LENGTH = 255

# Integer metrics are stored in 32-bit signed columns.
METRIC_INT_MAX = 2_147_483_647
