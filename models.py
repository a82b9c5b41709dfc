"""
Data models for the Uploadcare Gallery service
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


PreviewKind = Literal["image", "video", "pdf", "audio", "icon"]
MainAction = Literal["lightbox", "download", "open"]


class GroupDescriptor(BaseModel):
    """Validated, authorized identity of a CDN file group"""

    model_config = {"frozen": True}

    host: str = Field(..., description="Allow-listed CDN host")
    group_id: str = Field(..., min_length=36, max_length=36, description="UUID-shaped group identifier")
    count: int = Field(..., ge=1, description="Number of files in the group")

    @property
    def base_url(self) -> str:
        return f"https://{self.host}/{self.group_id}~{self.count}"


class GroupRejection(BaseModel):
    """Reason a group URL was refused"""

    model_config = {"frozen": True}

    error: str = Field(..., description="Human-readable rejection reason")


ValidationResult = Union[GroupDescriptor, GroupRejection]


class FileInfo(BaseModel):
    """Display metadata for one file of a group"""

    model_config = {"frozen": True}

    index: int = Field(..., ge=0, description="Zero-based position within the group")
    url: str = Field(..., description="CDN URL of the file")
    filename: str = Field(..., description="Display name, or a 'File N' placeholder")
    extension: str = Field(default="", description="Lowercase extension, empty when unknown")

    @property
    def is_placeholder(self) -> bool:
        return self.filename == f"File {self.index + 1}" and not self.extension


class FileCard(BaseModel):
    """Everything the gallery template needs to draw one file card"""

    index: int
    url: str
    filename: str
    extension: str
    download_url: str
    thumbnail_url: Optional[str] = None
    icon: str = "file"
    preview_type: PreviewKind = "icon"
    main_href: str
    opens_new_tab: bool = False
    lightbox: bool = False


class HealthResponse(BaseModel):
    """Health check payload"""

    status: str = "ok"
    version: str
