"""
core/data/catalog/types.py - Instance type dataclasses for the catalog

Standardized dataclasses for the compute sizes listed in a vendor descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Returned for regions without a rate; never zero so price ratios stay defined
MISSING_PRICE = 0.0001


@dataclass(frozen=True)
class CloudInstance:
    """Single instance size from a vendor descriptor"""

    model: str
    vcpus: float
    ram: float  # GB
    prices: dict[str, float] = field(default_factory=dict, hash=False, compare=False)
    family: str = ""

    def get_price(self, region: str | None) -> float:
        """Hourly rate for region, or MISSING_PRICE when unknown"""
        if region is not None:
            price = self.prices.get(region)
            if price:
                return price
        return MISSING_PRICE

    @property
    def regions(self) -> list[str]:
        return sorted(self.prices)

    def to_dict(self) -> dict:
        """Descriptor form (vCPUs / RAM / Price keys)"""
        return {
            "model": self.model,
            "vCPUs": self.vcpus,
            "RAM": self.ram,
            "Price": dict(self.prices),
        }
