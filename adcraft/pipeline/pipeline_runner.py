"""
Pipeline runner module.

This module turns a campaign brief into ad images: one base image per
product, resized and overlaid for every configured aspect ratio, then
uploaded through the provider. Every (product, aspect ratio) variant
succeeds or fails on its own.
"""

import datetime
import random
import time
from typing import Callable, List, Optional, Sequence

from adcraft.campaign.models import CampaignBrief, Product
from adcraft.campaign.prompt_builder import generate_image_prompt, generate_negative_prompt
from adcraft.composition.aspect_ratio_handler import AspectRatio, AspectRatioHandler, load_aspect_ratios
from adcraft.composition.image_editor import ImageEditor, TextOverlayOptions
from adcraft.composition.styles import logo_position_for_index
from adcraft.core.config import get_config_value
from adcraft.core.constants import (
    BASE_IMAGE_HEIGHT,
    BASE_IMAGE_WIDTH,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_FILE_EXTENSION,
    DEFAULT_PROVIDER_MAX_RETRIES,
    DEFAULT_PROVIDER_RETRY_DELAY,
)
from adcraft.core.error_handler import retry_call
from adcraft.core.logging_config import get_logger
from adcraft.pipeline.models import (
    COMPLETE,
    ERROR,
    PROGRESS,
    START,
    AssetError,
    AssetMetadata,
    GeneratedAsset,
    PipelineResult,
    PipelineSummary,
    ProgressEvent,
)
from adcraft.pipeline.output_manager import generate_asset_filename
from adcraft.pipeline.progress import CallbackSink, ProgressCallback, ProgressSink
from adcraft.providers.base import CloudProvider

# Initialize logger
logger = get_logger(__name__)


class CreativePipeline:
    """
    Class for generating the ad creatives of a campaign.

    Args:
        provider: Provider used for image generation and storage.
        progress_sink: Sink receiving every progress event.
        aspect_ratios: Output shapes, in processing order. Defaults to
            ``output.aspect_ratios`` from configuration.
        image_editor: Overlay renderer.
        aspect_ratio_handler: Resizer.
        rng: Source of randomness for overlay styles. Ignored when an
            ``image_editor`` is given.
        max_retries: Retries for transient provider failures.
        retry_delay: Initial retry delay in seconds.
        sleep: Sleep function used between retries.
    """

    def __init__(
        self,
        provider: CloudProvider,
        progress_sink: Optional[ProgressSink] = None,
        aspect_ratios: Optional[Sequence[AspectRatio]] = None,
        image_editor: Optional[ImageEditor] = None,
        aspect_ratio_handler: Optional[AspectRatioHandler] = None,
        rng: Optional[random.Random] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.provider = provider
        self.progress_sink = progress_sink
        self.aspect_ratios = tuple(aspect_ratios or load_aspect_ratios(get_config_value("output.aspect_ratios")))
        self.image_editor = image_editor or ImageEditor(
            font_dir=get_config_value("composition.font_dir"),
            rng=rng
        )
        self.aspect_ratio_handler = aspect_ratio_handler or AspectRatioHandler()
        self.padding = get_config_value("composition.padding", 20)

        if max_retries is None:
            max_retries = get_config_value("providers.max_retries", DEFAULT_PROVIDER_MAX_RETRIES)
        if retry_delay is None:
            retry_delay = get_config_value("providers.retry_delay", DEFAULT_PROVIDER_RETRY_DELAY)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.sleep = sleep

    def execute(
        self,
        brief: CampaignBrief,
        progress_callback: Optional[ProgressCallback] = None
    ) -> PipelineResult:
        """
        Generate every (product, aspect ratio) variant of a brief.

        Per-item failures are recorded in the result and never raised.

        Args:
            brief: Validated campaign brief.
            progress_callback: Called with every progress event, in addition
                to the pipeline's progress sink.

        Returns:
            PipelineResult with the produced assets and the failed variants.

        Raises:
            Exception: Only for failures outside any single variant, after an
                ``error`` event has been emitted.
        """
        sinks: List[ProgressSink] = []
        if self.progress_sink:
            sinks.append(self.progress_sink)
        if progress_callback:
            sinks.append(CallbackSink(progress_callback))

        started = time.monotonic()
        result = PipelineResult(campaign_id=brief.campaign_id)

        def emit(event_type: str, message: str, **kwargs) -> None:
            event = ProgressEvent(type=event_type, campaign_id=brief.campaign_id, message=message, **kwargs)
            for sink in sinks:
                sink.emit(event)

        try:
            logger.info(f"Starting campaign {brief.campaign_id} with {len(brief.products)} products")
            emit(START, f"Starting campaign generation for {len(brief.products)} products")

            for product in brief.products:
                self._process_product(brief, product, result, emit)

            duration = int((time.monotonic() - started) * 1000)
            result.summary = PipelineSummary(
                total_assets=len(brief.products) * len(self.aspect_ratios),
                success_count=len(result.assets),
                error_count=len(result.errors),
                duration=duration,
            )

            logger.info(
                f"Campaign {brief.campaign_id} finished: {result.summary.success_count} assets, "
                f"{result.summary.error_count} errors in {duration} ms"
            )
            emit(
                COMPLETE,
                f"Campaign generation complete. Generated {len(result.assets)} assets in {duration / 1000:.1f}s"
            )
        except Exception as e:
            logger.exception(f"Pipeline failed for campaign {brief.campaign_id}")
            emit(ERROR, f"Pipeline failed: {e}", error=str(e))
            raise

        return result

    def _process_product(self, brief: CampaignBrief, product: Product, result: PipelineResult, emit) -> None:
        prompt = None

        try:
            if product.existing_assets:
                emit(PROGRESS, f"Using existing asset for {product.name}...", product_id=product.id)
                base_image = self._call(self.provider.download, product.existing_assets[0])
            else:
                prompt = generate_image_prompt(brief, product)
                emit(PROGRESS, f"Generating image for {product.name}...", product_id=product.id, prompt=prompt)
                base_image = self._call(
                    self.provider.generate_image,
                    prompt,
                    negative_prompt=generate_negative_prompt(),
                    width=BASE_IMAGE_WIDTH,
                    height=BASE_IMAGE_HEIGHT,
                )
        except Exception as e:
            message = f"Failed to process product {product.name}: {e}"
            logger.error(message)
            for aspect_ratio in self.aspect_ratios:
                result.errors.append(AssetError(product.id, aspect_ratio.label, message))
            emit(ERROR, message, product_id=product.id, error=str(e))
            return

        for index, aspect_ratio in enumerate(self.aspect_ratios):
            emit(
                PROGRESS,
                f"Creating {aspect_ratio.label} variant for {product.name}...",
                product_id=product.id,
                aspect_ratio=aspect_ratio.label
            )

            try:
                asset = self._create_variant(brief, product, base_image, aspect_ratio, index, prompt)
            except Exception as e:
                message = f"Failed to create {aspect_ratio.label} variant: {e}"
                logger.error(f"{product.id}: {message}")
                result.errors.append(AssetError(product.id, aspect_ratio.label, message))
                emit(ERROR, message, product_id=product.id, aspect_ratio=aspect_ratio.label, error=str(e))
                continue

            result.assets.append(asset)
            emit(
                PROGRESS,
                f"Created {aspect_ratio.label} variant for {product.name}",
                product_id=product.id,
                aspect_ratio=aspect_ratio.label,
                asset=asset,
                completed=True
            )

    def _create_variant(
        self,
        brief: CampaignBrief,
        product: Product,
        base_image: bytes,
        aspect_ratio: AspectRatio,
        index: int,
        prompt: Optional[str]
    ) -> GeneratedAsset:
        resized = self.aspect_ratio_handler.resize_to(base_image, aspect_ratio)

        options = TextOverlayOptions(
            text=brief.message,
            font_size=aspect_ratio.width // 20,
            logo=brief.logo_bytes,
            logo_position=logo_position_for_index(index),
            brand_colors=brief.brand_colors or None,
            padding=self.padding,
        )
        final_image = self.image_editor.add_text_overlay(resized, options)

        path = generate_asset_filename(
            brief.campaign_id,
            product.id,
            aspect_ratio.label,
            DEFAULT_FILE_EXTENSION
        )
        stored_path = self._call(self.provider.upload, final_image, path, DEFAULT_CONTENT_TYPE)

        return GeneratedAsset(
            product_id=product.id,
            product_name=product.name,
            aspect_ratio=aspect_ratio.label,
            path=stored_path,
            metadata=AssetMetadata(
                generated_at=datetime.datetime.now(datetime.timezone.utc).isoformat(),
                aspect_ratio=aspect_ratio.label,
                width=aspect_ratio.width,
                height=aspect_ratio.height,
                prompt=prompt,
            ),
        )

    def _call(self, func, *args, **kwargs):
        return retry_call(
            func,
            *args,
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
            sleep=self.sleep,
            **kwargs
        )
