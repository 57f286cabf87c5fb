"""Main configuration data structure."""
from dataclasses import dataclass, field

from .collection_config import CollectionConfig
from .display_config import DisplayConfig
from .threshold_config import ThresholdConfig


@dataclass
class Config:
    """Main configuration class."""
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    collection: CollectionConfig = field(default_factory=CollectionConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
