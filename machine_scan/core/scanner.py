"""Public entry point: frame in, ranked machine results out."""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, List, Optional

from machine_scan.core.alternatives import AlternativesGenerator
from machine_scan.core.api import ClassificationCapability, VisionServiceAPI
from machine_scan.core.arbiter import Arbiter
from machine_scan.core.catalog import MachineCatalog, catalog_from_config
from machine_scan.core.config import resolve_api_key, resolve_service_url
from machine_scan.core.constants import JPEG_QUALITY, SERVICE_ENDPOINT
from machine_scan.core.encoder import Frame, encode_frame
from machine_scan.core.models import RecognitionResult
from machine_scan.core.recognition import RecognitionClient
from machine_scan.core.validation import FeatureValidator

logger = logging.getLogger(__name__)


class MachineScanner:
    """Runs one frame through encoding, recognition and arbitration."""

    def __init__(
        self,
        client: RecognitionClient,
        arbiter: Arbiter,
        encoder: Callable[..., str] = encode_frame,
        jpeg_quality: float = JPEG_QUALITY,
    ) -> None:
        self.client = client
        self.arbiter = arbiter
        self.encoder = encoder
        self.jpeg_quality = jpeg_quality

    @property
    def catalog(self) -> MachineCatalog:
        return self.arbiter.catalog

    async def recognize(
        self,
        frame: Frame,
        user_profile: Optional[Dict[str, Any]] = None,
        session_context: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> List[RecognitionResult]:
        """Identify the machine in ``frame``.

        Service failures never escape: the worst case is the unknown entry
        followed by the whole catalog as browsable choices.
        """
        encoded = self.encoder(frame, quality=self.jpeg_quality)
        logger.info("Encoded frame: %d base64 characters", len(encoded))
        analysis = await self.client.recognize(
            encoded,
            user_profile=user_profile,
            session_context=session_context,
            hint=hint,
        )
        return self.arbiter.decide(analysis)


def build_scanner(
    config: Dict[str, Any],
    capability: Optional[ClassificationCapability] = None,
    catalog: Optional[MachineCatalog] = None,
    rng: Optional[random.Random] = None,
) -> MachineScanner:
    """Wire the production pipeline from configuration."""
    if catalog is None:
        catalog = catalog_from_config(config)
    service_cfg = config.get("service", {})

    if capability is None:
        capability = VisionServiceAPI(
            api_key=resolve_api_key(config),
            base_url=resolve_service_url(config),
            endpoint=str(service_cfg.get("endpoint", SERVICE_ENDPOINT)),
            max_retries=int(service_cfg.get("max_retries", 1)),
            timeout_seconds=float(service_cfg.get("timeout_seconds", 60)),
        )

    if rng is None:
        seed = config.get("alternatives", {}).get("seed")
        rng = random.Random(seed) if seed is not None else random.Random()

    arbiter = Arbiter(
        catalog=catalog,
        validator=FeatureValidator(),
        alternatives=AlternativesGenerator(catalog, rng=rng),
    )
    return MachineScanner(
        client=RecognitionClient(capability, catalog),
        arbiter=arbiter,
        jpeg_quality=float(config.get("encoder", {}).get("jpeg_quality", JPEG_QUALITY)),
    )
