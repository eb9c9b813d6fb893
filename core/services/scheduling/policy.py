from __future__ import annotations

import logging
import os

from core.services.scheduling.models import BackwardPassPolicy

logger = logging.getLogger(__name__)


def default_backward_pass_policy() -> BackwardPassPolicy:
    raw = (os.getenv("TDP_BACKWARD_PASS", "") or "").strip().lower()
    if not raw:
        return BackwardPassPolicy.MINIMUM
    try:
        return BackwardPassPolicy(raw)
    except ValueError:
        logger.warning("Unknown TDP_BACKWARD_PASS value '%s'; using 'minimum'.", raw)
        return BackwardPassPolicy.MINIMUM


__all__ = ["default_backward_pass_policy"]
