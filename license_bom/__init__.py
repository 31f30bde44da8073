"""License bill of materials: attribute licenses to a dependency closure."""

__version__ = "0.1.0"
