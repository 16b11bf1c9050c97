"""Turn a service analysis into a ranked result list and a scan decision."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from machine_scan.core.alternatives import AlternativesGenerator
from machine_scan.core.catalog import MachineCatalog
from machine_scan.core.constants import (
    ACCEPT_THRESHOLD,
    ALTERNATIVES_TO_SHOW,
    AUTO_NAVIGATE_THRESHOLD,
    DEFAULT_MATCH_REASONING,
    DEFAULT_UNCERTAIN_REASONING,
    SERVICE_FAILURE_REASONING,
    UNKNOWN_IMAGE_URL,
    UNKNOWN_MACHINE_ID,
    UNKNOWN_MACHINE_NAME,
)
from machine_scan.core.models import MachineAnalysis, RecognitionResult, ScanDecision
from machine_scan.core.validation import FeatureValidator

logger = logging.getLogger(__name__)


class Arbiter:
    """Decides between an accepted match and the browse-everything fallback."""

    def __init__(
        self,
        catalog: MachineCatalog,
        validator: FeatureValidator,
        alternatives: AlternativesGenerator,
    ) -> None:
        self.catalog = catalog
        self.validator = validator
        self.alternatives = alternatives

    def decide(self, analysis: Optional[MachineAnalysis]) -> List[RecognitionResult]:
        """Build the ordered result list for one recognition call.

        ``None`` stands for a failed service call and yields the fallback with
        a fixed message. An analysis is accepted only when its validated
        confidence reaches ACCEPT_THRESHOLD and it names a catalog machine;
        anything else yields the fallback carrying the service's reasoning.
        """
        if analysis is None:
            return self.not_recognized(SERVICE_FAILURE_REASONING)

        machine = self.catalog.get_by_id(analysis.machine_id) if analysis.machine_id else None
        if machine is None:
            if analysis.machine_id:
                logger.info("Service named %s, which is not in the catalog", analysis.machine_id)
            return self.not_recognized(analysis.reasoning or DEFAULT_UNCERTAIN_REASONING)

        confidence = self.validator.validate(machine.id, analysis.features, analysis.confidence)
        if confidence < ACCEPT_THRESHOLD:
            return self.not_recognized(analysis.reasoning or DEFAULT_UNCERTAIN_REASONING)

        primary = RecognitionResult(
            machine_id=machine.id,
            name=analysis.machine_name or machine.name,
            confidence=confidence,
            image_url=machine.image_url,
            reasoning=analysis.reasoning or DEFAULT_MATCH_REASONING,
        )
        # Stable sort keeps catalog order among equal confidences.
        similar = sorted(
            self.alternatives.alternatives_for(machine.id, confidence),
            key=lambda result: result.confidence,
            reverse=True,
        )
        return [primary, *similar]

    def not_recognized(self, reasoning: str) -> List[RecognitionResult]:
        """Unknown sentinel followed by every catalog machine as a browsable entry."""
        results = [
            RecognitionResult(
                machine_id=UNKNOWN_MACHINE_ID,
                name=UNKNOWN_MACHINE_NAME,
                confidence=0.0,
                image_url=UNKNOWN_IMAGE_URL,
                reasoning=reasoning,
            )
        ]
        results.extend(
            RecognitionResult(
                machine_id=machine.id,
                name=machine.name,
                confidence=0.0,
                image_url=machine.image_url,
                reasoning=f"Browse {machine.name}",
            )
            for machine in self.catalog
        )
        return results


def best_match(results: Sequence[RecognitionResult]) -> Optional[RecognitionResult]:
    """First result when it is confident enough to navigate on its own."""
    if results and results[0].confidence >= AUTO_NAVIGATE_THRESHOLD:
        return results[0]
    return None


def alternatives_to_show(results: Sequence[RecognitionResult]) -> List[RecognitionResult]:
    """Leading results for a "did you mean" list.

    The primary candidate stays in the list as its first entry.
    """
    return list(results[:ALTERNATIVES_TO_SHOW])


def process_results(results: Sequence[RecognitionResult]) -> ScanDecision:
    match = best_match(results)
    return ScanDecision(
        best_match=match,
        alternatives=alternatives_to_show(results),
        should_auto_navigate=match is not None,
    )
