"""
Pydantic Models for hikescout

Defines the site configuration, the extraction schemas handed to the
extraction model, and the per-site scraping result.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SiteStrategy(str, Enum):
    """How a site is scraped."""
    LIST_PAGE = "list_page"
    CALENDAR_DRILLDOWN = "calendar_drilldown"


class SiteConfig(BaseModel):
    """A travel-operator website to scrape."""
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Page listing the operator's hikes")
    company: str = Field(..., description="Human-readable operator name")
    strategy: SiteStrategy = Field(default=SiteStrategy.LIST_PAGE)


# ============ Extraction schemas ============


class HikeRecord(BaseModel):
    """A single hike as found on an operator's page."""
    name: str = Field(..., description="Name of the hike or adventure")
    location: Optional[str] = Field(None, description="Location or destination of the hike")
    date: Optional[str] = Field(None, description="Date of the hike")
    time: Optional[str] = Field(None, description="Meeting or departure time")
    meeting_point: Optional[str] = Field(None, description="Meeting point or pickup location")
    cost: Optional[str] = Field(None, description="Cost or price of the hike")
    contact: Optional[str] = Field(
        None, description="Contact information (phone, email, or social media)"
    )

    def has_details(self) -> bool:
        """True if anything beyond name and date was found."""
        return any(
            (self.location, self.time, self.meeting_point, self.cost, self.contact)
        )


# A single detail record is the same shape as one list entry.
HikeDetailSchema = HikeRecord


class HikeListSchema(BaseModel):
    """Hikes found on a listing page."""
    hikes: list[HikeRecord] = Field(..., description="Hikes matching the target dates")


class CalendarEvent(BaseModel):
    """An event cell on a calendar page (name and date only)."""
    name: str = Field(..., description="Name of the event/hike")
    date: str = Field(..., description="Date of the event")


class CalendarEventListSchema(BaseModel):
    """Events found on a calendar page."""
    events: list[CalendarEvent] = Field(..., description="Events matching the target dates")


# ============ Results ============


class ScrapedResult(BaseModel):
    """Outcome of scraping one site."""
    model_config = ConfigDict(frozen=True)

    company: str
    url: str
    hikes: tuple[HikeRecord, ...] = Field(default_factory=tuple)
