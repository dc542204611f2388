"""Dashboard application configuration."""

from pydantic import BaseModel, Field

from core.actions import INVOICES_ROUTE


class AppConfig(BaseModel):
    """Settings for the invoice dashboard's HTTP layer."""

    app_name: str = Field(
        default="Invoice Dashboard",
        description="Title shown in the OpenAPI docs",
    )
    invoices_route: str = Field(
        default=INVOICES_ROUTE,
        description="Listing route that mutations invalidate and redirect to",
    )
    listing_cache_ttl_seconds: int = Field(
        default=300,
        description="How long a rendered invoice listing stays cached",
        ge=1,
        le=86400,
    )
    listing_limit: int = Field(
        default=100,
        description="Maximum invoices shown on the listing",
        ge=1,
        le=1000,
    )
