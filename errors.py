"""
Banner Watermarker v1.2 - Error Types
=====================================
Failures that cross module boundaries
"""

class DecodeFailure(Exception):
    """A single input file could not be decoded into an image"""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Cannot decode '{name}': {reason}")
        self.name = name
        self.reason = reason

class DependencyUnavailable(Exception):
    """An optional backend library is not installed"""

    def __init__(self, package: str, feature: str):
        super().__init__(
            f"{feature} requires '{package}', which is not installed. "
            f"Run: pip install {package}"
        )
        self.package = package
        self.feature = feature
