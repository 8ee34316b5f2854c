"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_MINUTES = 0
DEFAULT_BATCH_WORKERS = 5
MAX_BATCH_WORKERS = 10
DEFAULT_HISTORY_LIMIT = 20
DEFAULT_PENDING_PAGE_SIZE = 20

# How long after an overnight shift's scheduled end we still look for its clock-out
OVERNIGHT_CLOCK_OUT_ALLOWANCE_MINUTES = 240

TEMPLATE_NOTE_PREFIX = "Template applied: "
APPROVAL_NOTE_PREFIX = "[approval note] "

MSG_ALREADY_EXISTS = "already exists"
MSG_NOT_AWAITING_APPROVAL = "not awaiting approval"
MSG_NOT_CONFIRMED = "not confirmed"
MSG_SHIFT_NOT_FOUND = "shift not found"
