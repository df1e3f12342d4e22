"""Trigger rule loader."""

import logging
from typing import Any

from ov_departures.adapters.config.app_config import AppConfig
from ov_departures.domain.models.trigger_rule import (
    DEFAULT_THRESHOLD_MINUTES,
    TriggerKind,
    TriggerMode,
)

logger = logging.getLogger(__name__)


class TriggerRuleLoader:
    """Loads trigger argument sets from app config.

    The argument sets have the same shape the host runtime hands out, so the
    engine cannot tell configured triggers apart from host-managed ones.
    """

    @staticmethod
    def load(config: AppConfig) -> dict[TriggerKind, list[dict[str, Any]]]:
        """Load trigger argument sets grouped by kind."""
        result: dict[TriggerKind, list[dict[str, Any]]] = {kind: [] for kind in TriggerKind}

        for trigger_data in config.get_triggers_config():
            kind_value = str(trigger_data.get("kind", "")).lower()
            try:
                kind = TriggerKind(kind_value)
            except ValueError as e:
                raise ValueError(
                    f"Invalid trigger kind '{kind_value}': must be 'soon' or 'delayed'"
                ) from e

            station_id = trigger_data.get("station_id")
            if not station_id:
                raise ValueError(f"Trigger of kind '{kind.value}' is missing station_id")

            trigger_mode = str(trigger_data.get("trigger_mode", TriggerMode.ONCE.value))
            if trigger_mode not in {mode.value for mode in TriggerMode}:
                raise ValueError(
                    f"Invalid trigger_mode '{trigger_mode}': must be 'once' or 'always'"
                )

            destination = trigger_data.get("destination")
            result[kind].append(
                {
                    "station": {
                        "id": str(station_id),
                        "name": str(trigger_data.get("station_name", station_id)),
                    },
                    "destination": {"name": str(destination)} if destination else None,
                    kind.threshold_arg: int(
                        trigger_data.get("minutes", DEFAULT_THRESHOLD_MINUTES)
                    ),
                    "trigger_mode": trigger_mode,
                }
            )

        logger.debug(
            f"Loaded {len(result[TriggerKind.SOON])} soon and "
            f"{len(result[TriggerKind.DELAYED])} delayed trigger(s)"
        )
        return result
