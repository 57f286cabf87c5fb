"""Collection options configuration."""
from dataclasses import dataclass, field
from typing import List


@dataclass
class CollectionConfig:
    """Options for the psutil metrics provider."""
    cpu_sample_interval: float = 0.5
    parallel_instances: bool = False
    include_down_adapters: bool = False
    skip_filesystems: List[str] = field(
        default_factory=lambda: ["squashfs", "tmpfs", "devtmpfs", "overlay"])
    max_workers: int = 4

    def __post_init__(self):
        """Fix invalid values."""
        if self.cpu_sample_interval < 0:
            self.cpu_sample_interval = 0.5
        if self.max_workers <= 0:
            self.max_workers = 4
        self.skip_filesystems = [fs.lower() for fs in self.skip_filesystems]
