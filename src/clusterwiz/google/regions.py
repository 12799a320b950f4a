"""Regions offered for managed clusters.

There is no CLI query for which regions support managed clusters, so the
lists are maintained by hand. Display names come from the region lookup at
runtime.
"""

from __future__ import annotations

__all__ = ["PREVIEW_REGIONS", "PRODUCTION_REGIONS"]

PRODUCTION_REGIONS: tuple[str, ...] = (
    "australiaeast",
    "australiasoutheast",
    "canadacentral",
    "canadaeast",
    "centralindia",
    "centralus",
    "eastasia",
    "eastus",
    "eastus2",
    "francecentral",
    "japaneast",
    "northeurope",
    "southeastasia",
    "southindia",
    "uksouth",
    "ukwest",
    "westeurope",
    "westus",
    "westus2",
)

PREVIEW_REGIONS: tuple[str, ...] = ()
