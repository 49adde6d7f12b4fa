"""
Generation pipeline: orchestration, progress reporting and reports.
"""

from adcraft.pipeline.models import (
    AssetError,
    AssetMetadata,
    GeneratedAsset,
    PipelineResult,
    PipelineSummary,
    ProgressEvent,
)
from adcraft.pipeline.output_manager import OutputManager, generate_asset_filename
from adcraft.pipeline.pipeline_runner import CreativePipeline
from adcraft.pipeline.progress import CallbackSink, ProgressRegistry, ProgressSink, RegistrySink
