"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TIME_IN_CSV_HEADER = ("Name", "Email", "Date", "Time In", "Status", "IP Address")
ROSTER_REPORT_CSV_HEADER = ("Employee Name", "Email", "Status", "Late Minutes", "Remarks")

DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_NAME_LENGTH = 100

DEFAULT_QUEUE_BATCH_SIZE = 10
DEFAULT_QUEUE_MAX_SIZE = 100
DEFAULT_QUEUE_DELAY_SECONDS = 5 * 60

DEFAULT_OTP_TTL_SECONDS = 10 * 60
DEFAULT_OTP_MAX_ATTEMPTS = 5
OTP_LENGTH = 6

DEFAULT_LATE_GRACE_MINUTES = 1

GRAPH_SCOPE = "https://graph.microsoft.com/.default"
GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
GRAPH_AUTHORITY = "https://login.microsoftonline.com/{tenant_id}"
