"""Bilingual smart-home command context processor."""

from context_processor.device_types import (
    DEFAULT_TAXONOMY,
    DeviceCapabilities,
    DeviceTaxonomy,
    DeviceType,
    detect_device_type,
)
from context_processor.dispatch import DispatchPlan, plan_dispatch
from context_processor.models import Device, DeviceIntent, DeviceMatch, ProcessedContext
from context_processor.processor import ContextProcessor, ProcessorConfig, ProcessorMetrics

__all__ = [
    "DEFAULT_TAXONOMY",
    "ContextProcessor",
    "Device",
    "DeviceCapabilities",
    "DeviceIntent",
    "DeviceMatch",
    "DeviceTaxonomy",
    "DeviceType",
    "DispatchPlan",
    "ProcessedContext",
    "ProcessorConfig",
    "ProcessorMetrics",
    "detect_device_type",
    "plan_dispatch",
]
