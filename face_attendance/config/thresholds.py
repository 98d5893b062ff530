"""
Matching and verification thresholds
"""
import os
import logging

logger = logging.getLogger(__name__)


def _env_float(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid {name}={value!r}, using default {default}")
        return default


# ============================================================================
# SIGNATURE
# ============================================================================
SIGNATURE_WIDTH = 200
SIGNATURE_HEIGHT = 200

# ============================================================================
# RECOGNITION
# ============================================================================
# Mean squared pixel difference; a match needs distance strictly below this.
# Raising it trades false rejects for false accepts.
REJECT_THRESHOLD = _env_float("REJECT_THRESHOLD", 1500.0)

# ============================================================================
# VERIFICATION
# ============================================================================
DWELL_SECONDS = _env_float("DWELL_SECONDS", 3.0)  # continuous detection before commit
COOLDOWN_SECONDS = _env_float("COOLDOWN_SECONDS", 10.0)  # between mark attempts per identity

# ============================================================================
# TRACKING
# ============================================================================
IOU_THRESHOLD = 0.3  # IoU threshold for face tracking
