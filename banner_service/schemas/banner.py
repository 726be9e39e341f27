from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from banner_service.models.banner import BannerType, LinkType

_http_url = TypeAdapter(HttpUrl)


def _check_url(v: str) -> str:
    # Stored as sent; HttpUrl would normalise it (trailing slash, punycode)
    try:
        _http_url.validate_python(v)
    except ValidationError:
        raise ValueError("must be an absolute http(s) URL")
    return v


ImageUrl = Annotated[str, AfterValidator(_check_url)]


class BannerCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: ImageUrl
    image_url_desktop: Optional[ImageUrl] = None
    image_url_mobile: Optional[ImageUrl] = None
    link_type: LinkType = LinkType.NONE
    link_url: Optional[str] = None
    is_enabled: bool = True
    is_fixed: bool = False
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    display_order: Optional[int] = None
    priority: Optional[int] = None
    banner_type: BannerType = BannerType.NEWS

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title required")
        return v


# Columns that may not be cleared through a patch
_NOT_NULLABLE = (
    "title", "image_url", "link_type", "is_enabled", "is_fixed",
    "display_order", "priority", "banner_type",
)


class BannerUpdate(BaseModel):
    """Partial update. Presence is read from ``model_fields_set``: an omitted
    field keeps its stored value, an explicit ``null`` clears a nullable one."""

    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    image_url: Optional[ImageUrl] = None
    image_url_desktop: Optional[ImageUrl] = None
    image_url_mobile: Optional[ImageUrl] = None
    link_type: Optional[LinkType] = None
    link_url: Optional[str] = None
    is_enabled: Optional[bool] = None
    is_fixed: Optional[bool] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    display_order: Optional[int] = None
    priority: Optional[int] = None
    banner_type: Optional[BannerType] = None

    @field_validator(*_NOT_NULLABLE)
    @classmethod
    def _reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} may not be null")
        return v

    @field_validator("title", "image_url")
    @classmethod
    def _not_blank(cls, v, info):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError(f"{info.field_name} may not be empty")
        return v

    def provided(self) -> Dict[str, object]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class BannerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    image_url: str
    image_url_desktop: Optional[str] = None
    image_url_mobile: Optional[str] = None
    link_type: LinkType
    link_url: Optional[str] = None
    is_enabled: bool
    is_fixed: bool
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    display_order: int
    priority: int
    banner_type: BannerType
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BannerOrderItem(BaseModel):
    id: int
    display_order: int


class ReorderBanners(BaseModel):
    banners: List[BannerOrderItem]


class BannerStats(BaseModel):
    total: int
    active: int
    by_type: Dict[str, int]
