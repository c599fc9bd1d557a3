"""Environment configuration for taskrepeat.

Values are read at call time so they can be changed per process (or per test)
without re-importing the package.
"""

import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from taskrepeat.models.repeating import AnchorMode

load_dotenv()

# Anchor mode for tasks stored without one
DEFAULT_REPEAT_FROM = "COMPLETION_DATE"


def get_default_anchor_mode() -> "AnchorMode":
    """Anchor mode for tasks stored without an explicit `repeat_from`."""
    # Imported here: taskrepeat.models.task imports this module
    from taskrepeat.models.repeating import AnchorMode

    raw = os.getenv("TASKREPEAT_DEFAULT_REPEAT_FROM", DEFAULT_REPEAT_FROM).strip().upper()
    try:
        return AnchorMode(raw)
    except ValueError:
        raise ValueError(
            f"TASKREPEAT_DEFAULT_REPEAT_FROM must be one of "
            f"{', '.join(m.value for m in AnchorMode)}, got {raw!r}"
        ) from None

