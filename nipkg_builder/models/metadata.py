"""Package metadata model"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..constants import DEFAULT_ARCHITECTURE


@dataclass
class PackageMetadata:
    """Resolved metadata that ends up in the control file and filename"""
    name: str
    version: str
    description: str = ""
    maintainer: str = ""
    architecture: str = DEFAULT_ARCHITECTURE
    display_name: Optional[str] = None
    user_visible: Optional[bool] = None
    depends: List[str] = field(default_factory=list)
