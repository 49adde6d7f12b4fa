"""
Command-line interface for the adcraft package.

This module provides the CLI commands for the adcraft package:
- generate: Generate ad creatives for every product and aspect ratio of a brief
- validate: Validate a campaign brief
- overlay: Apply the campaign text overlay to a single image
"""

import os
import sys
import random
from typing import Optional

import click

from adcraft import __version__
from adcraft.core.config import get_config_value
from adcraft.core.logging_config import (
    configure_logging,
    get_logger,
    setup_campaign_logging,
    teardown_campaign_logging,
)

# Initialize logging
configure_logging()
logger = get_logger(__name__)

@click.group()
@click.version_option(version=__version__)
def main():
    """
    adcraft - Creative generation pipeline for multi-format ad campaigns.

    Turns a campaign brief into ad images for every product and aspect
    ratio, with the campaign message and brand logo laid over each one.
    """
    pass

@main.command()
@click.argument('brief_path', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True))
@click.option('-o', '--output-dir', type=click.Path(file_okay=False, dir_okay=True),
              help='Output directory (default: storage.path from configuration)')
@click.option('--provider', 'provider_kind', type=click.Choice(['openrouter', 'openai', 'local']),
              help='Generation provider (default: providers.kind from configuration)')
@click.option('--logo', 'logo_path', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
              help='Logo image to overlay (overrides the logo in the brief)')
@click.option('--seed', type=int, help='Seed for overlay style selection, for reproducible layouts')
def generate(brief_path: str, output_dir: Optional[str] = None, provider_kind: Optional[str] = None,
             logo_path: Optional[str] = None, seed: Optional[int] = None):
    """
    Generate ad creatives from a campaign brief.

    BRIEF_PATH: Path to the campaign brief (JSON or YAML)

    Assets are written to OUTPUT_DIR/<campaignId>/<productId>/ and a run
    report to OUTPUT_DIR/<campaignId>/summary.json. Exits with status 1 if
    any variant failed.

    Examples:
      adcraft generate examples/campaign_brief.json
      adcraft generate examples/campaign_brief.yaml -o ./out --provider openrouter
      adcraft generate examples/campaign_brief.json --logo logo.png --seed 7
    """
    from adcraft.campaign.input_validator import InputValidator
    from adcraft.pipeline.output_manager import OutputManager
    from adcraft.pipeline.pipeline_runner import CreativePipeline
    from adcraft.providers.factory import create_provider

    output_dir = output_dir or get_config_value("storage.path", "output")
    campaign_log = None

    try:
        brief = InputValidator().load_campaign_brief(brief_path)
        campaign_log = setup_campaign_logging(brief.campaign_id, output_dir)

        if logo_path:
            with open(logo_path, 'rb') as f:
                brief = brief.with_logo(f.read())
            logger.info(f"Using logo from {logo_path}")

        provider = create_provider(kind=provider_kind, storage_path=output_dir)
        rng = random.Random(seed) if seed is not None else None
        pipeline = CreativePipeline(provider, rng=rng)

        click.echo(f"Generating creatives for campaign {brief.campaign_id} "
                   f"({len(brief.products)} products, provider: {provider.name})")

        def echo_progress(event):
            prefix = "  ERROR: " if event.type == "error" else "  "
            click.echo(f"{prefix}{event.message}", err=event.type == "error")

        result = pipeline.execute(brief, progress_callback=echo_progress)
        report_path = OutputManager(output_dir).save_report(result)

    except Exception as e:
        logger.error(f"Error generating campaign: {str(e)}")
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)
    finally:
        if campaign_log:
            teardown_campaign_logging(campaign_log)

    summary = result.summary
    click.echo("")
    click.echo(f"Campaign: {result.campaign_id}")
    click.echo(f"Total assets: {summary.total_assets}")
    click.echo(f"Successful: {summary.success_count}")
    click.echo(f"Errors: {summary.error_count}")
    click.echo(f"Duration: {summary.duration / 1000:.1f}s")
    click.echo(f"Report saved to {report_path}")

    if result.has_errors:
        for error in result.errors:
            click.echo(f"  {error.product_id} [{error.aspect_ratio}]: {error.error}", err=True)
        sys.exit(1)

@main.command()
@click.argument('brief_path', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True))
def validate(brief_path: str):
    """
    Validate a campaign brief.

    BRIEF_PATH: Path to the campaign brief (JSON or YAML)
    """
    from adcraft.campaign.input_validator import InputValidator

    validator = InputValidator()

    try:
        brief = validator.load_campaign_brief(brief_path, load_logo=False)
    except Exception as e:
        logger.error(f"Invalid campaign brief {brief_path}: {str(e)}")
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)

    summary = validator.summarize(brief)
    click.echo(f"Campaign brief is valid: {summary['campaignId']}")
    click.echo(f"Products: {summary['productCount']}")
    click.echo(f"Target: {summary['targetAudience']} in {summary['targetRegion']}")

@main.command()
@click.argument('image_path', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True))
@click.argument('output_path', type=click.Path(file_okay=True, dir_okay=False))
@click.option('--text', '-t', required=True, help='Text to overlay')
@click.option('--font-size', type=int, help='Font size in pixels (default: image width / 20)')
@click.option('--position', type=click.Choice(['top', 'center', 'bottom']),
              help='Overlay band position (default: random)')
@click.option('--logo', 'logo_path', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
              help='Logo image to place beside the text')
@click.option('--seed', type=int, help='Seed for overlay style selection')
def overlay(image_path: str, output_path: str, text: str, font_size: Optional[int] = None,
            position: Optional[str] = None, logo_path: Optional[str] = None, seed: Optional[int] = None):
    """
    Apply a text overlay to an existing image.

    IMAGE_PATH: Path to the image file to apply text to
    OUTPUT_PATH: Path to save the output PNG

    Examples:
      adcraft overlay photo.png out.png --text "Summer Sale"
      adcraft overlay photo.png out.png -t "Summer Sale" --position bottom --seed 3
    """
    from PIL import Image

    from adcraft.composition.image_editor import ImageEditor, TextOverlayOptions

    try:
        with open(image_path, 'rb') as f:
            image_data = f.read()

        if font_size is None:
            with Image.open(image_path) as img:
                font_size = max(1, img.width // 20)

        logo = None
        if logo_path:
            with open(logo_path, 'rb') as f:
                logo = f.read()

        editor = ImageEditor(
            font_dir=get_config_value("composition.font_dir"),
            rng=random.Random(seed) if seed is not None else None
        )
        result = editor.add_text_overlay(image_data, TextOverlayOptions(
            text=text,
            font_size=font_size,
            position=position,
            logo=logo,
            padding=get_config_value("composition.padding", 20),
        ))

        parent = os.path.dirname(os.path.abspath(output_path))
        os.makedirs(parent, exist_ok=True)
        with open(output_path, 'wb') as f:
            f.write(result)

        click.echo(f"Text overlay applied to {image_path} and saved to {output_path}")

    except Exception as e:
        logger.error(f"Error applying text overlay: {str(e)}")
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)
