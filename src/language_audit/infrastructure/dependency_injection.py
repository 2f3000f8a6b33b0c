"""Dependency injection container for the application."""

import boto3
import httpx
from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer

from language_audit.config import config
from language_audit.infrastructure.language_detection_client import (
    LanguageDetectionClient,
)
from language_audit.infrastructure.legacy_detector import LegacyDetector
from language_audit.infrastructure.s3_client import S3Client
from language_audit.services.dual_detector import DualLanguageDetector
from language_audit.services.materials_reader import MaterialsReader
from language_audit.services.result_classifier import ResultClassifier
from language_audit.services.result_store import ResultStore
from language_audit.services.sampler import Sampler
from language_audit.services.text_preview_fetcher import TextPreviewFetcher


def _create_session() -> boto3.Session:
    """Create boto3 session.

    Uses AWS_PROFILE when set, otherwise the default credential chain.
    """
    if config.aws_profile:
        return boto3.Session(
            profile_name=config.aws_profile, region_name=config.aws_region
        )
    return boto3.Session(region_name=config.aws_region)


class DependenciesContainer(DeclarativeContainer):
    """DI container for the application."""

    session = providers.Singleton(_create_session)

    # S3 dependency chain
    s3_boto_client = providers.Singleton(
        lambda session: session.client("s3"),
        session=session,
    )

    s3_client = providers.Singleton(
        S3Client,
        client=s3_boto_client,
    )

    text_preview_fetcher = providers.Singleton(
        TextPreviewFetcher,
        s3_client=s3_client,
        bucket=config.bucket,
        max_length=config.max_text_length,
    )

    # Detection dependency chain
    http_client = providers.Singleton(
        httpx.Client,
        base_url=config.language_detection_url,
        timeout=config.detection_timeout,
    )

    language_detection_client = providers.Singleton(
        LanguageDetectionClient,
        client=http_client,
    )

    legacy_detector = providers.Singleton(LegacyDetector)

    dual_detector = providers.Singleton(
        DualLanguageDetector,
        detection_client=language_detection_client,
        legacy_detector=legacy_detector,
    )

    # Persistence and aggregation
    result_store = providers.Singleton(ResultStore)

    materials_reader = providers.Singleton(MaterialsReader)

    result_classifier = providers.Singleton(
        ResultClassifier,
        result_store=result_store,
    )

    sampler = providers.Singleton(
        Sampler,
        result_store=result_store,
        sample_size=config.sample_size,
    )
