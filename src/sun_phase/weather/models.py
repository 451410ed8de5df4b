"""Data models for the sun phase service."""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from sun_phase.config import SUN_PHASE_RESOURCE_TYPE


class WUTime(BaseModel):
    """Clock time as reported by Weather Underground (decimal strings)."""
    hour: int = Field(..., ge=0, le=23, description="Hour of day")
    minute: int = Field(..., ge=0, le=59, description="Minute of hour")

    @field_validator("hour", "minute", mode="before")
    @classmethod
    def parse_decimal(cls, value):
        # Upstream sends zero-padded strings such as "07"
        if isinstance(value, str):
            return int(value)
        return value


class WUSunPhase(BaseModel):
    """Sunrise and sunset block of the astronomy feature."""
    sunrise: WUTime
    sunset: WUTime


class WUAstronomy(BaseModel):
    """Raw response from the Weather Underground astronomy feature."""
    response: Optional[Any] = Field(None, description="Request metadata, passed through")
    moon_phase: Optional[Any] = Field(None, description="Moon data, unused")
    sun_phase: WUSunPhase


class SunPhaseTimes(BaseModel):
    """Normalized sunrise/sunset for one day."""
    sunrise_h: int = Field(..., ge=0, le=23)
    sunrise_m: int = Field(..., ge=0, le=59)
    sunset_h: int = Field(..., ge=0, le=23)
    sunset_m: int = Field(..., ge=0, le=59)


class SunPhaseAttributes(SunPhaseTimes):
    pass


class SunPhaseResource(BaseModel):
    type: Literal["sun_phase"] = SUN_PHASE_RESOURCE_TYPE
    id: str
    attributes: SunPhaseAttributes


class SunPhaseDocument(BaseModel):
    """JSON:API document wrapping a single sun phase resource."""
    data: SunPhaseResource


class SunPhaseRecord(SunPhaseTimes):
    """Sun phase result identified by the cache key that produced it."""
    id: str = Field(..., description="Cache key used to produce the record")

    def to_document(self) -> SunPhaseDocument:
        attributes = SunPhaseAttributes(**self.model_dump(exclude={"id"}))
        return SunPhaseDocument(data=SunPhaseResource(id=self.id, attributes=attributes))

    def to_json(self) -> str:
        """Serialize as a compact JSON:API document, the exact form stored in the cache.

        The trailing newline keeps entries byte-compatible with those already
        written for external pollers.
        """
        return self.to_document().model_dump_json() + "\n"


class ErrorObject(BaseModel):
    """JSON:API error object. Members left as None are omitted on output."""
    title: Optional[str] = None
    detail: Optional[str] = None
    status: str
    code: Optional[str] = None


class ErrorDocument(BaseModel):
    errors: List[ErrorObject]

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True) + "\n"
