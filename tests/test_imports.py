"""
Test that the public package imports work.
"""

import pytest

def test_imports():
    """Test that all package imports work correctly."""
    # Test imports from the main package
    from adcraft import (
        InputValidator,
        CampaignBrief,
        Product,
        AspectRatio,
        ImageEditor,
        TextOverlayOptions,
        CreativePipeline,
        PipelineResult,
        ProgressEvent,
        create_provider
    )

    # Test imports from core
    from adcraft.core import (
        get_config,
        get_config_value,
        get_api_key,
        get_logger,
        configure_logging,
        is_valid_image_file,
        ProviderError,
        ValidationError,
        ConfigurationError,
        CompositionError
    )

    # Test imports from subpackages
    from adcraft.composition import AspectRatioHandler, StyleSelector, DEFAULT_ASPECT_RATIOS
    from adcraft.pipeline import OutputManager, ProgressRegistry, RegistrySink
    from adcraft.providers import CloudProvider, LocalProvider, LocalStorage, ProviderKind
    from adcraft.schemas import load_schema

    assert CreativePipeline is not None
    assert len(DEFAULT_ASPECT_RATIOS) == 3
    assert load_schema("campaign_brief")["type"] == "object"
