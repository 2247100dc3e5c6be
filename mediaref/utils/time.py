from datetime import datetime
import pytz

UTC = pytz.UTC


def now_iso():
    """
    Returns the current UTC timestamp in ISO 8601 format.
    Used to stamp diagnostics reports.
    """
    return datetime.now(UTC).isoformat()
