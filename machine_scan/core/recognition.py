"""Request building and response parsing for machine recognition."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from machine_scan.core.api import APIError, ClassificationCapability
from machine_scan.core.catalog import MachineCatalog
from machine_scan.core.constants import IMAGE_FORMAT, MACHINE_DESCRIPTIONS
from machine_scan.core.models import FeatureSet, Machine, MachineAnalysis

logger = logging.getLogger(__name__)


def describe_machine(machine: Machine) -> str:
    """One-line physical description sent to the classifier."""
    described = MACHINE_DESCRIPTIONS.get(machine.id)
    if described:
        return described
    return f"{machine.type} machine targeting {machine.muscle_group}"


def _as_confidence(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError("confidence must be numeric")
    value = float(raw)
    if math.isnan(value):
        raise ValueError("confidence is NaN")
    return min(1.0, max(0.0, value))


def _as_text(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def parse_analysis(payload: Any) -> Optional[MachineAnalysis]:
    """Parse the ``analysis`` object of a successful response."""
    if not isinstance(payload, dict):
        return None
    try:
        confidence = _as_confidence(payload.get("confidence", 0))
    except (TypeError, ValueError):
        logger.warning("Discarding analysis with invalid confidence: %r", payload.get("confidence"))
        return None

    return MachineAnalysis(
        confidence=confidence,
        machine_id=_as_text(payload.get("machineId")),
        machine_name=_as_text(payload.get("machineName")),
        reasoning=_as_text(payload.get("reasoning")),
        features=FeatureSet.from_payload(payload.get("features")),
    )


class RecognitionClient:
    """Sends encoded frames plus the catalog summary to the vision service."""

    def __init__(self, capability: ClassificationCapability, catalog: MachineCatalog) -> None:
        self.capability = capability
        self.catalog = catalog

    def catalog_summary(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": machine.id,
                "name": machine.name,
                "type": machine.type,
                "synonyms": list(machine.synonyms),
                "description": describe_machine(machine),
            }
            for machine in self.catalog
        ]

    def build_request(
        self,
        encoded_image: str,
        user_profile: Optional[Dict[str, Any]] = None,
        session_context: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> Dict[str, Any]:
        request: Dict[str, Any] = {
            "imageData": encoded_image,
            "imageFormat": IMAGE_FORMAT,
            "machineCatalog": self.catalog_summary(),
        }
        if user_profile is not None:
            request["userProfile"] = user_profile
        if session_context is not None:
            request["sessionRequest"] = session_context
        if hint is not None:
            request["optional_text"] = hint
        return request

    async def recognize(
        self,
        encoded_image: str,
        user_profile: Optional[Dict[str, Any]] = None,
        session_context: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> Optional[MachineAnalysis]:
        """Return the service's analysis, or None when none is usable."""
        request = self.build_request(encoded_image, user_profile, session_context, hint)
        try:
            response = await self.capability.classify(request)
        except APIError as exc:
            logger.warning("Machine recognition request failed: %s", exc)
            return None
        except Exception:
            logger.warning("Machine recognition capability raised unexpectedly", exc_info=True)
            return None

        if not isinstance(response, dict):
            logger.warning("Unexpected recognition response type: %s", type(response).__name__)
            return None
        if response.get("success") is not True:
            logger.warning("Recognition service reported failure: %s", response.get("error") or "no detail")
            return None

        analysis = parse_analysis(response.get("analysis"))
        if analysis is None:
            logger.warning("Recognition response carried no usable analysis")
        else:
            logger.info(
                "Service suggested %s at %.2f confidence",
                analysis.machine_id or "no machine",
                analysis.confidence,
            )
        return analysis
