"""
FixerRegistry: rule id -> fixer bindings with per-rule enable flags.

Fixers are registered explicitly (one at a time or from a static table);
there is no module discovery.
"""

from collections import Counter
from typing import Dict, List, Mapping, Optional, Type

from fixguard.exceptions import FixerRegistrationError
from fixguard.logging_config import logger
from fixguard.schemas import FixerInfo, FixerValidationReport, RegistryStats
from fixguard.validation.validator import CodeValidator

from .base import FixerBase


class FixerRegistry:
    """Keyed table of fixers. The first fixer registered for a rule wins."""

    def __init__(self):
        self.fixers: Dict[str, FixerBase] = {}
        self.fixer_info: Dict[str, FixerInfo] = {}

    @classmethod
    def from_table(
        cls,
        table: Mapping[str, Type[FixerBase]],
        complexity: Optional[Mapping[str, str]] = None,
        validator: Optional[CodeValidator] = None
    ) -> "FixerRegistry":
        """
        Build a registry from a static {rule_id: fixer class} table.

        Args:
            table: Fixer classes keyed by rule id
            complexity: Optional per-rule complexity overrides
            validator: Validator shared by every fixer, normally the
                session's so fixes are checked in its language
        """
        registry = cls()
        complexity = complexity or {}
        for rule_id, fixer_class in table.items():
            registry.register_fixer(
                rule_id, fixer_class, complexity.get(rule_id, "simple"), validator
            )
        logger.info(f"Registered {len(registry.fixers)} fixer(s) from table")
        return registry

    def register(self, fixer: FixerBase) -> bool:
        """
        Register a fixer instance.

        Returns:
            True if registered, False if the rule already had a fixer

        Raises:
            FixerRegistrationError: If fixer is not a FixerBase or has no rule id
        """
        if not isinstance(fixer, FixerBase):
            raise FixerRegistrationError("Fixer must extend FixerBase")

        if not fixer.rule_id:
            raise FixerRegistrationError("Fixer must have a rule_id")

        if fixer.rule_id in self.fixers:
            logger.info(f"Fixer for rule '{fixer.rule_id}' is already registered, skipping")
            return False

        self.fixers[fixer.rule_id] = fixer
        self.fixer_info[fixer.rule_id] = FixerInfo(
            rule_id=fixer.rule_id,
            complexity=fixer.complexity or "simple",
            module_path=f"{type(fixer).__module__}.{type(fixer).__name__}",
            enabled=True,
        )
        logger.debug(f"Registered fixer for rule: {fixer.rule_id}")
        return True

    def register_fixer(
        self,
        rule_id: str,
        fixer_class: Type[FixerBase],
        complexity: str = "simple",
        validator: Optional[CodeValidator] = None
    ) -> bool:
        try:
            fixer = fixer_class(rule_id, complexity, validator)
        except Exception as e:
            logger.error(f"Failed to register fixer for rule '{rule_id}': {e}")
            raise FixerRegistrationError(f"Cannot construct fixer for rule '{rule_id}': {e}") from e
        return self.register(fixer)

    def get_fixer(self, rule_id: str) -> Optional[FixerBase]:
        """The fixer for a rule, or None if missing or disabled."""
        if not self.is_fixable(rule_id):
            return None
        return self.fixers[rule_id]

    def is_fixable(self, rule_id: str) -> bool:
        info = self.fixer_info.get(rule_id)
        return rule_id in self.fixers and info is not None and info.enabled

    def get_fixable_rules(self) -> List[str]:
        return [rule_id for rule_id in self.fixers if self.is_fixable(rule_id)]

    def set_fixer_enabled(self, rule_id: str, enabled: bool) -> bool:
        info = self.fixer_info.get(rule_id)
        if not info:
            return False

        info.enabled = enabled
        logger.info(f"{'Enabled' if enabled else 'Disabled'} fixer for rule: {rule_id}")
        return True

    def get_fixer_info(self) -> List[FixerInfo]:
        return list(self.fixer_info.values())

    def unregister(self, rule_id: str) -> bool:
        removed = self.fixers.pop(rule_id, None) is not None
        self.fixer_info.pop(rule_id, None)

        if removed:
            logger.debug(f"Unregistered fixer for rule: {rule_id}")
        return removed

    def clear(self) -> None:
        self.fixers.clear()
        self.fixer_info.clear()
        logger.debug("Cleared all registered fixers")

    def validate_fixers(self) -> FixerValidationReport:
        """Check that every registered fixer overrides fix()."""
        report = FixerValidationReport()

        for rule_id, fixer in self.fixers.items():
            if type(fixer).fix is FixerBase.fix:
                report.invalid.append({"rule_id": rule_id, "error": "Missing fix method"})
            else:
                report.valid.append(rule_id)

        return report

    def get_stats(self) -> RegistryStats:
        infos = list(self.fixer_info.values())
        enabled = sum(1 for info in infos if info.enabled)
        return RegistryStats(
            total=len(self.fixers),
            enabled=enabled,
            disabled=len(infos) - enabled,
            complexity=dict(Counter(info.complexity for info in infos)),
        )
