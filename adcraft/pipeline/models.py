"""
Pipeline result and progress event models.

All models serialize to camelCase dictionaries, the shape written to
``summary.json`` reports and sent to progress listeners.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Progress event types
START = "start"
PROGRESS = "progress"
COMPLETE = "complete"
ERROR = "error"

EVENT_TYPES = (START, PROGRESS, COMPLETE, ERROR)


@dataclass
class AssetMetadata:
    generated_at: str
    aspect_ratio: str
    width: int
    height: int
    prompt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "generatedAt": self.generated_at,
            "aspectRatio": self.aspect_ratio,
            "dimensions": {"width": self.width, "height": self.height},
        }
        if self.prompt is not None:
            data["prompt"] = self.prompt
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetMetadata":
        dimensions = data.get("dimensions", {})
        return cls(
            generated_at=data["generatedAt"],
            aspect_ratio=data["aspectRatio"],
            width=int(dimensions.get("width", 0)),
            height=int(dimensions.get("height", 0)),
            prompt=data.get("prompt"),
        )


@dataclass
class GeneratedAsset:
    """One successfully produced image variant."""
    product_id: str
    product_name: str
    aspect_ratio: str
    path: str
    metadata: AssetMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "aspectRatio": self.aspect_ratio,
            "path": self.path,
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratedAsset":
        return cls(
            product_id=data["productId"],
            product_name=data["productName"],
            aspect_ratio=data["aspectRatio"],
            path=data["path"],
            metadata=AssetMetadata.from_dict(data["metadata"]),
        )


@dataclass
class AssetError:
    """One failed image variant."""
    product_id: str
    aspect_ratio: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"productId": self.product_id, "aspectRatio": self.aspect_ratio, "error": self.error}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetError":
        return cls(product_id=data["productId"], aspect_ratio=data["aspectRatio"], error=data["error"])


@dataclass
class PipelineSummary:
    total_assets: int = 0
    success_count: int = 0
    error_count: int = 0
    duration: int = 0  # milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalAssets": self.total_assets,
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineSummary":
        return cls(
            total_assets=data.get("totalAssets", 0),
            success_count=data.get("successCount", 0),
            error_count=data.get("errorCount", 0),
            duration=data.get("duration", 0),
        )


@dataclass
class PipelineResult:
    """
    Outcome of one campaign run.

    ``summary.total_assets`` is always products x aspect ratios, whatever
    succeeded.
    """
    campaign_id: str
    assets: List[GeneratedAsset] = field(default_factory=list)
    errors: List[AssetError] = field(default_factory=list)
    summary: PipelineSummary = field(default_factory=PipelineSummary)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "campaignId": self.campaign_id,
            "assets": [asset.to_dict() for asset in self.assets],
            "errors": [error.to_dict() for error in self.errors],
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineResult":
        return cls(
            campaign_id=data["campaignId"],
            assets=[GeneratedAsset.from_dict(a) for a in data.get("assets", [])],
            errors=[AssetError.from_dict(e) for e in data.get("errors", [])],
            summary=PipelineSummary.from_dict(data.get("summary", {})),
        )


@dataclass
class ProgressEvent:
    """
    A lifecycle notification emitted while a campaign runs.
    """
    type: str
    campaign_id: str
    message: str
    product_id: Optional[str] = None
    aspect_ratio: Optional[str] = None
    asset: Optional[GeneratedAsset] = None
    error: Optional[str] = None
    completed: Optional[bool] = None
    prompt: Optional[str] = None

    def __post_init__(self):
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Unknown progress event type: {self.type}")

    @property
    def is_terminal(self) -> bool:
        """True for the single success or failure event of a (product, ratio) variant."""
        if self.aspect_ratio is None:
            return False
        return self.type == ERROR or (self.type == PROGRESS and bool(self.completed))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "campaignId": self.campaign_id,
            "message": self.message,
        }
        if self.product_id is not None:
            data["productId"] = self.product_id
        if self.aspect_ratio is not None:
            data["aspectRatio"] = self.aspect_ratio
        if self.asset is not None:
            data["asset"] = self.asset.to_dict()
        if self.error is not None:
            data["error"] = self.error
        if self.completed is not None:
            data["completed"] = self.completed
        if self.prompt is not None:
            data["prompt"] = self.prompt
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressEvent":
        asset = data.get("asset")
        return cls(
            type=data["type"],
            campaign_id=data["campaignId"],
            message=data["message"],
            product_id=data.get("productId"),
            aspect_ratio=data.get("aspectRatio"),
            asset=GeneratedAsset.from_dict(asset) if asset else None,
            error=data.get("error"),
            completed=data.get("completed"),
            prompt=data.get("prompt"),
        )
