"""Operation result models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .metadata import PackageMetadata


@dataclass
class BuildResult:
    """Build pipeline result"""
    success: bool
    package_path: Optional[Path] = None
    metadata: Optional[PackageMetadata] = None
    control_text: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    duration: float = 0.0
    notices: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    removed_packages: List[str] = field(default_factory=list)

    @property
    def package_size(self) -> Optional[int]:
        """Get package size if available"""
        if self.package_path and Path(self.package_path).exists():
            return Path(self.package_path).stat().st_size
        return None

    @property
    def exit_code(self) -> int:
        """Process exit status for this result"""
        return 0 if self.success else 1
