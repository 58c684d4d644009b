"""
Domain models — Pydantic types for formula generation.

All models are re-exported here for convenient access:

    from formulagen.core.models import PackageInfo, RawReleaseAsset, Asset, FormulaContext
"""

from formulagen.core.models.asset import Asset, RawReleaseAsset
from formulagen.core.models.formula import FormulaContext, FormulaStrategy
from formulagen.core.models.manifest import CargoBin, CargoManifest, CargoPackage
from formulagen.core.models.package import PackageInfo

__all__ = [
    # asset.py
    "Asset",
    "RawReleaseAsset",
    # formula.py
    "FormulaContext",
    "FormulaStrategy",
    # manifest.py
    "CargoBin",
    "CargoManifest",
    "CargoPackage",
    # package.py
    "PackageInfo",
]
