"""Quiz constants shared across the SDK.

Several values can be overridden via environment variables so deployments
can tune quiz length and session lifetime without code changes.
"""

import os

# Number of questions when the caller omits ``total`` or sends a value <= 0.
DEFAULT_QUESTION_COUNT = int(os.getenv("QUIZ_DEFAULT_TOTAL", "10"))

# Upper bound on questions per session; larger requests are clamped.
MAX_QUESTION_COUNT = int(os.getenv("QUIZ_MAX_TOTAL", "100"))

# Key prefix for session records in the key-value store.
SESSION_KEY_PREFIX = "quiz_session:"

# Katakana block that has a one-to-one hiragana counterpart
# (ァ U+30A1 .. ヶ U+30F6 maps onto ぁ U+3041 .. ゖ U+3096).
KATAKANA_START = 0x30A1
KATAKANA_END = 0x30F6
KANA_OFFSET = 0x60

# Error text the server sends with a 422; clients match on it to tell a
# stale question apart from other unprocessable responses.
QUESTION_MISMATCH_MESSAGE = "question_id does not match current question"
