"""Static constants and mappings for Wheel of Gains."""

from __future__ import annotations

SEARCH_URL_BASE = "https://www.google.com/search?q="
SEARCH_SUFFIX = " workout"

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~".
URI_COMPONENT_SAFE = "!*'()"

CATEGORY_PALETTE = (
    ("strength", "Strength Training", "#3b82f6"),
    ("cardio", "Cardio", "#ef4444"),
    ("flexibility", "Flexibility", "#22c55e"),
    ("sports", "Sports", "#f97316"),
    ("recovery", "Recovery", "#8b5cf6"),
    ("custom", "Custom", "#14b8a6"),
)

# Newest first.
SHARE_QUERY_KEYS = ("z", "data", "zip")
DEFAULT_SHARE_ORIGIN = "http://localhost:5173"
DEFAULT_SHARE_BASE_PATH = "/wheel-of-gains/"

STORAGE_VERSION = "1.0"
STORAGE_KEY = "wheelOfGains_workouts"
HISTORY_SUFFIX = "_history"
MAX_HISTORY_ENTRIES = 10

ENTRY_ID_PREFIX = "entry"
COMMENT_PREFIXES = ("#", "//")
