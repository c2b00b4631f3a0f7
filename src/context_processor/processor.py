"""Context processor.

Wires normalization, intent classification, device matching, parameter
extraction, confidence aggregation and suggestions into one call over an
immutable device/room snapshot.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from context_processor.device_types import DEFAULT_TAXONOMY, DeviceTaxonomy
from context_processor.intent import classify_intent
from context_processor.matcher import DEFAULT_MIN_CONFIDENCE, DEFAULT_TOP_K, DeviceMatcher
from context_processor.models import Device, DeviceIntent, ProcessedContext
from context_processor.parameters import extract_parameters
from context_processor.scoring import calculate_confidence
from context_processor.suggestions import DEFAULT_DID_YOU_MEAN_THRESHOLD, generate_suggestions
from context_processor.text import normalize_input

logger = logging.getLogger(__name__)

SUGGESTION_THRESHOLD = 0.6


@dataclass
class ProcessorConfig:
    top_k: int = DEFAULT_TOP_K
    min_match_confidence: float = DEFAULT_MIN_CONFIDENCE
    suggestion_threshold: float = SUGGESTION_THRESHOLD
    did_you_mean: bool = False
    did_you_mean_threshold: float = DEFAULT_DID_YOU_MEAN_THRESHOLD


@dataclass
class ProcessorMetrics:
    total_commands: int = 0
    unknown_intents: int = 0
    low_confidence: int = 0

    @property
    def unknown_ratio(self) -> float:
        if self.total_commands == 0:
            return 0.0
        return self.unknown_intents / self.total_commands

    def record(self, *, unknown: bool, low_confidence: bool) -> None:
        self.total_commands += 1
        if unknown:
            self.unknown_intents += 1
        if low_confidence:
            self.low_confidence += 1


@dataclass(frozen=True)
class InventorySnapshot:
    """Devices and rooms the processor reasons over. Replaced, never mutated."""

    devices: tuple[Device, ...] = ()
    rooms: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, devices: Iterable[Device], rooms: Mapping[int, str]) -> "InventorySnapshot":
        return cls(devices=tuple(devices), rooms=MappingProxyType(dict(rooms)))


class ContextProcessor:
    """Resolve natural-language commands into intents, devices and parameters.

    The snapshot sits behind a single reference. Updates build a new snapshot
    and swap it under a lock; process_context reads the reference once, so a
    call never sees new devices paired with an old room map.
    """

    def __init__(
        self,
        devices: Iterable[Device] = (),
        rooms: Mapping[int, str] | None = None,
        config: ProcessorConfig | None = None,
        taxonomy: DeviceTaxonomy = DEFAULT_TAXONOMY,
        logger_override: logging.Logger | None = None,
    ) -> None:
        self.config = config or ProcessorConfig()
        self.taxonomy = taxonomy
        self.metrics = ProcessorMetrics()
        self._logger = logger_override or logger
        self._write_lock = threading.Lock()
        self._metrics_lock = threading.Lock()
        self._snapshot = InventorySnapshot.build(devices, rooms or {})

    @property
    def snapshot(self) -> InventorySnapshot:
        return self._snapshot

    def update_devices(self, devices: Iterable[Device]) -> None:
        """Replace the device list, keeping the current rooms."""
        with self._write_lock:
            snapshot = InventorySnapshot.build(devices, self._snapshot.rooms)
            self._snapshot = snapshot
        self._logger.info("inventory_update devices=%s", len(snapshot.devices))

    def update_rooms(self, rooms: Mapping[int, str]) -> None:
        """Replace the room map, keeping the current devices."""
        with self._write_lock:
            snapshot = InventorySnapshot.build(self._snapshot.devices, rooms)
            self._snapshot = snapshot
        self._logger.info("inventory_update rooms=%s", len(snapshot.rooms))

    def update_inventory(self, devices: Iterable[Device], rooms: Mapping[int, str]) -> None:
        """Replace devices and rooms in one swap."""
        snapshot = InventorySnapshot.build(devices, rooms)
        with self._write_lock:
            self._snapshot = snapshot
        self._logger.info(
            "inventory_update devices=%s rooms=%s",
            len(snapshot.devices),
            len(snapshot.rooms),
        )

    def matcher(self, snapshot: InventorySnapshot | None = None) -> DeviceMatcher:
        if snapshot is None:
            snapshot = self._snapshot
        return DeviceMatcher(snapshot.devices, snapshot.rooms, self.taxonomy)

    def process_context(self, user_input: str) -> ProcessedContext:
        """Process one command.

        Args:
            user_input: raw command text

        Returns:
            ProcessedContext; suggestions are set only for low confidence
        """
        snapshot = self._snapshot
        matcher = self.matcher(snapshot)

        normalized = normalize_input(user_input)
        intent = classify_intent(normalized)
        device_matches = matcher.match(
            normalized,
            top_k=self.config.top_k,
            min_confidence=self.config.min_match_confidence,
        )
        parameters = extract_parameters(normalized, intent, snapshot.rooms)
        confidence = calculate_confidence(intent, device_matches, parameters)

        suggestions = None
        low_confidence = confidence < self.config.suggestion_threshold
        if low_confidence:
            suggestions = tuple(
                generate_suggestions(
                    normalized,
                    matcher,
                    min_confidence=self.config.min_match_confidence,
                    did_you_mean=self.config.did_you_mean,
                    did_you_mean_threshold=self.config.did_you_mean_threshold,
                )
            )

        with self._metrics_lock:
            self.metrics.record(
                unknown=intent == DeviceIntent.UNKNOWN,
                low_confidence=low_confidence,
            )
        self._logger.info(
            "query=%s intent=%s matches=%s parameters=%s confidence=%.2f",
            normalized,
            intent.value,
            [m.device.id for m in device_matches],
            parameters,
            confidence,
        )

        return ProcessedContext(
            intent=intent,
            device_matches=tuple(device_matches),
            parameters=parameters,
            confidence=confidence,
            suggestions=suggestions,
        )
