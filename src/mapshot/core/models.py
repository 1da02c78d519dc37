#!/usr/bin/env python3
"""
Request Models for MapShot

This module defines the pydantic models describing a map screenshot request:
markers, the partially specified options accepted from callers, the fully
specified request handed to the capture loop, and the MCP tool payload.

Wire names are camelCase (isRounded, popupText) to match the map page
contract; attribute names are snake_case. Both spellings are accepted on input.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Third-party package documentation:
- Pydantic: https://docs.pydantic.dev/

Sample input:
    MapScreenshotOptions(center=(40.7128, -74.0060), zoom=12,
                         markers=[{"position": [40.7128, -74.0060], "popupText": "NYC"}])

Expected output:
    ScreenshotRequest(...).to_event_payload() ->
    {
        "center": [40.7128, -74.006],
        "zoom": 12,
        "width": 800,
        "height": 800,
        "isRounded": False,
        "markers": [{"position": [40.7128, -74.006], "popupText": "NYC"}]
    }
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mapshot.core.constants import BOUNDS, DEFAULT_OPTIONS

Coordinates = Tuple[float, float]


def check_coordinates(value: Coordinates) -> Coordinates:
    """
    Check a (latitude, longitude) pair against the allowed ranges.

    Raises:
        ValueError: If either value is not finite or out of range
    """
    lat, lng = value
    if not math.isfinite(lat) or not BOUNDS["latitude"]["min"] <= lat <= BOUNDS["latitude"]["max"]:
        raise ValueError("Latitude must be between -90 and 90")
    if not math.isfinite(lng) or not BOUNDS["longitude"]["min"] <= lng <= BOUNDS["longitude"]["max"]:
        raise ValueError("Longitude must be between -180 and 180")
    return value


def check_zoom(value: int) -> int:
    if value < BOUNDS["zoom"]["min"]:
        raise ValueError("Zoom level must be at least 1")
    if value > BOUNDS["zoom"]["max"]:
        raise ValueError("Zoom level must be at most 18 (maximum map zoom)")
    return value


def check_dimension(value: int) -> int:
    if value < BOUNDS["dimension"]["min"]:
        raise ValueError("Dimension must be at least 1 pixel")
    if value > BOUNDS["dimension"]["max"]:
        raise ValueError("Dimension must be at most 10000 pixels")
    return value


class MarkerConfig(BaseModel):
    """A point of interest drawn on the map."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    position: Coordinates = Field(
        ..., description="The position of the marker on the map as [latitude, longitude]."
    )
    popup_text: Optional[str] = Field(
        None,
        alias="popupText",
        description="Optional text to display in a popup when the marker is clicked.",
    )

    @field_validator("position")
    @classmethod
    def _check_position(cls, value: Coordinates) -> Coordinates:
        return check_coordinates(value)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"position": list(self.position)}
        if self.popup_text is not None:
            payload["popupText"] = self.popup_text
        return payload


class MapScreenshotOptions(BaseModel):
    """Options for one map screenshot; everything except center is optional."""

    model_config = ConfigDict(populate_by_name=True)

    center: Coordinates = Field(
        ..., description="The center coordinates of the map as [latitude, longitude]."
    )
    zoom: Optional[int] = Field(
        None, description="The zoom level of the map (1-18). Higher values zoom in closer. Default: 14"
    )
    width: Optional[int] = Field(
        None, description="The width of the generated image in pixels (1-10000). Default: 800"
    )
    height: Optional[int] = Field(
        None, description="The height of the generated image in pixels (1-10000). Default: 800"
    )
    is_rounded: Optional[bool] = Field(
        None,
        alias="isRounded",
        description="Whether to round the corners of the map container. Default: false",
    )
    markers: Optional[List[MarkerConfig]] = Field(
        None,
        description="Array of markers to display on the map. Each marker has a position and optional popup text.",
    )

    @field_validator("center")
    @classmethod
    def _check_center(cls, value: Coordinates) -> Coordinates:
        return check_coordinates(value)

    @field_validator("zoom")
    @classmethod
    def _check_zoom(cls, value: Optional[int]) -> Optional[int]:
        return value if value is None else check_zoom(value)

    @field_validator("width", "height")
    @classmethod
    def _check_dimension(cls, value: Optional[int]) -> Optional[int]:
        return value if value is None else check_dimension(value)


class ScreenshotRequest(BaseModel):
    """A fully specified, immutable screenshot request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    center: Coordinates
    zoom: int = DEFAULT_OPTIONS["zoom"]
    width: int = DEFAULT_OPTIONS["width"]
    height: int = DEFAULT_OPTIONS["height"]
    is_rounded: bool = Field(DEFAULT_OPTIONS["is_rounded"], alias="isRounded")
    markers: Tuple[MarkerConfig, ...] = DEFAULT_OPTIONS["markers"]

    def to_event_payload(self) -> Dict[str, Any]:
        """Build the options object delivered with the configure event."""
        return {
            "center": list(self.center),
            "zoom": self.zoom,
            "width": self.width,
            "height": self.height,
            "isRounded": self.is_rounded,
            "markers": [marker.to_payload() for marker in self.markers],
        }


class MapScreenshotToolInput(BaseModel):
    """Payload of the generate-map-screenshot MCP tool."""

    model_config = ConfigDict(populate_by_name=True)

    options: MapScreenshotOptions = Field(..., description="Map screenshot configuration options")
    output_path: str = Field(
        ...,
        alias="outputPath",
        description="The file path where the generated map screenshot should be saved. Can be relative or absolute.",
    )

    @field_validator("output_path")
    @classmethod
    def _check_output_path(cls, value: str) -> str:
        if not value:
            raise ValueError("File path cannot be empty")
        return value
