"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_RECORD_LIMIT = 20
RECORD_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
UNKNOWN_BREAK_LABEL = "Break {break_id}"
