"""Services package."""

from language_audit.services.dual_detector import DualLanguageDetector
from language_audit.services.materials_reader import MaterialsReader
from language_audit.services.result_classifier import ResultClassifier, classify
from language_audit.services.result_store import ResultStore
from language_audit.services.sampler import Sampler
from language_audit.services.text_preview_fetcher import TextPreviewFetcher

__all__ = [
    "DualLanguageDetector",
    "MaterialsReader",
    "ResultClassifier",
    "ResultStore",
    "Sampler",
    "TextPreviewFetcher",
    "classify",
]
