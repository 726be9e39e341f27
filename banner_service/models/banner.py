import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, Index, Text, func
from banner_service.models.base import Base


class LinkType(str, enum.Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    NONE = "none"


class BannerType(str, enum.Enum):
    NEWS = "news"
    PROMOTIONAL = "promotional"
    FEATURED = "featured"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Banner(Base):
    __tablename__ = "banners"
    __table_args__ = (
        Index("ix_banners_is_enabled", "is_enabled"),
        Index("ix_banners_display_order", "display_order"),
        Index("ix_banners_dates", "start_date", "end_date"),
        Index("ix_banners_banner_type", "banner_type"),
        Index("ix_banners_priority", "priority"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Legacy single image; kept as fallback when device variants are absent
    image_url = Column(Text, nullable=False)
    image_url_desktop = Column(Text, nullable=True)
    image_url_mobile = Column(Text, nullable=True)
    link_type = Column(
        Enum(LinkType, name="banner_link_type", values_callable=_enum_values),
        nullable=False,
        default=LinkType.NONE,
    )
    link_url = Column(Text, nullable=True)
    is_enabled = Column(Boolean, nullable=False, default=True)
    is_fixed = Column(Boolean, nullable=False, default=False)
    # Null on fixed banners
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    # Lower value wins within its segment (timed or fixed)
    priority = Column(Integer, nullable=False, default=0)
    banner_type = Column(
        Enum(BannerType, name="banner_type", values_callable=_enum_values),
        nullable=False,
        default=BannerType.NEWS,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:
        kind = "fixed" if self.is_fixed else "timed"
        return f"<Banner id={self.id} {kind} priority={self.priority} enabled={self.is_enabled}>"
