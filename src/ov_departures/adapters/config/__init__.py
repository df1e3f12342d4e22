"""Configuration adapters."""

from ov_departures.adapters.config.app_config import AppConfig
from ov_departures.adapters.config.trigger_rule_loader import TriggerRuleLoader

__all__ = ["AppConfig", "TriggerRuleLoader"]
