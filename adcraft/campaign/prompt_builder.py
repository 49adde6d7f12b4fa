"""
Prompt construction for base image generation.
"""

from typing import Optional

from adcraft.campaign.models import CampaignBrief, Product
from adcraft.core.constants import NEGATIVE_PROMPT


def generate_image_prompt(brief: CampaignBrief, product: Product) -> str:
    """
    Build the image generation prompt for one product of a brief.

    Brand colours and the art style, when the brief has them, are appended
    so the generated photography matches the campaign.
    """
    subject = f"Professional product photography of {product.name}."
    description = product.description.strip().rstrip(".")
    if description:
        subject += f" {description}."

    lines = [
        subject,
        f"High quality commercial image for {brief.target_region} market, targeting {brief.target_audience}.",
        "Clean background, well-lit, studio quality, photorealistic, detailed, sharp focus, 8k resolution.",
    ]

    colors = brief.brand_colors
    if colors:
        palette = " and ".join(colors[k] for k in ("primary", "secondary") if k in colors)
        lines.append(f"Incorporate the brand color palette ({palette}) in props, lighting or background accents.")

    if brief.art_style:
        lines.append(f"Art style: {brief.art_style}.")

    return "\n".join(lines).strip()


def generate_negative_prompt(extra: Optional[str] = None) -> str:
    """Fixed negative prompt discouraging embedded text and artifacts."""
    if extra:
        return f"{NEGATIVE_PROMPT}, {extra}"
    return NEGATIVE_PROMPT
