"""
Campaign brief data model.

A brief is built once from validated input and is immutable from then on;
the pipeline only ever reads it.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str = ""
    existing_assets: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            existing_assets=tuple(data.get("existingAssets") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {"id": self.id, "name": self.name, "description": self.description}
        if self.existing_assets:
            result["existingAssets"] = list(self.existing_assets)
        return result


@dataclass(frozen=True)
class BrandAssets:
    """
    Brand assets referenced by a brief.

    ``logo`` is a reference (path) to the logo file; the decoded bytes travel
    separately on ``CampaignBrief.logo_bytes``.
    """
    logo: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandAssets":
        return cls(
            logo=data.get("logo"),
            primary_color=data.get("primaryColor"),
            secondary_color=data.get("secondaryColor"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        if self.logo:
            result["logo"] = self.logo
        if self.primary_color:
            result["primaryColor"] = self.primary_color
        if self.secondary_color:
            result["secondaryColor"] = self.secondary_color
        return result

    @property
    def brand_colors(self) -> Dict[str, str]:
        colors = {}
        if self.primary_color:
            colors["primary"] = self.primary_color
        if self.secondary_color:
            colors["secondary"] = self.secondary_color
        return colors


@dataclass(frozen=True)
class CampaignBrief:
    """
    One generation request.

    Attributes:
        campaign_id: Unique ID of the campaign run.
        products: Products to advertise, at least two.
        target_region: Market the campaign targets.
        target_audience: Audience the campaign targets.
        message: Campaign message overlaid on every variant.
        brand_assets: Optional logo reference and brand colours.
        art_style: Optional art direction appended to generation prompts.
        locale: Optional locale of the message.
        logo_bytes: Raw logo image, loaded by the caller before the brief
            reaches the pipeline.
    """
    campaign_id: str
    products: Tuple[Product, ...]
    target_region: str
    target_audience: str
    message: str
    brand_assets: Optional[BrandAssets] = None
    art_style: Optional[str] = None
    locale: Optional[str] = None
    logo_bytes: Optional[bytes] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CampaignBrief":
        brand_assets = data.get("brandAssets")
        return cls(
            campaign_id=data["campaignId"],
            products=tuple(Product.from_dict(p) for p in data["products"]),
            target_region=data["targetRegion"],
            target_audience=data["targetAudience"],
            message=data["message"],
            brand_assets=BrandAssets.from_dict(brand_assets) if brand_assets else None,
            art_style=data.get("artStyle"),
            locale=data.get("locale"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "campaignId": self.campaign_id,
            "products": [p.to_dict() for p in self.products],
            "targetRegion": self.target_region,
            "targetAudience": self.target_audience,
            "message": self.message,
        }
        if self.brand_assets:
            result["brandAssets"] = self.brand_assets.to_dict()
        if self.art_style:
            result["artStyle"] = self.art_style
        if self.locale:
            result["locale"] = self.locale
        return result

    def with_logo(self, logo_bytes: Optional[bytes]) -> "CampaignBrief":
        """Return a copy of the brief carrying the decoded logo bytes."""
        return replace(self, logo_bytes=logo_bytes)

    @property
    def brand_colors(self) -> Dict[str, str]:
        return self.brand_assets.brand_colors if self.brand_assets else {}

    @property
    def product_ids(self) -> List[str]:
        return [p.id for p in self.products]
