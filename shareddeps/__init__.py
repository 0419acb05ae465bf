"""Lint rule enforcing imports of core-shared modules through the core re-export path."""

from .manifest import ManifestLocator, ManifestParseError
from .models import Diagnostic, ImportReference, Manifest, TextFix, Verdict, VerdictKind
from .registry import SharedModuleRegistry, StaticSharedRegistry
from .session import AnalysisSession
from .tracker import FirstOccurrenceTracker

__version__ = "0.1.0"

__all__ = [
    "AnalysisSession",
    "Diagnostic",
    "FirstOccurrenceTracker",
    "ImportReference",
    "Manifest",
    "ManifestLocator",
    "ManifestParseError",
    "SharedModuleRegistry",
    "StaticSharedRegistry",
    "TextFix",
    "Verdict",
    "VerdictKind",
]
