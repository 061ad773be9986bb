"""Partner NGO directory and distance search."""
from __future__ import annotations
import math
from typing import List, Sequence

from ecoeats.domain.NGO import NGO
from ecoeats.utilities.config import NGO_SEARCH_RADIUS_KM
from ecoeats.utilities.errors import ValidationError

__all__ = ["SAMPLE_NGOS", "haversine_km", "find_nearby_ngos"]

EARTH_RADIUS_KM = 6371

SAMPLE_NGOS: tuple = (
    NGO("ngo1", "Feeding India", "+91-9876543210", "Delhi, India", 28.6315, 77.2167),
    NGO("ngo2", "No Food Waste", "+91-9087790877", "Chennai, Tamil Nadu", 13.0827, 80.2707),
    NGO("ngo3", "Roti Bank", "+91-8655580001", "Mumbai, Maharashtra", 19.0760, 72.8777),
    NGO("ngo4", "Rise Against Hunger India", "+91-8041121832", "Bengaluru, Karnataka", 12.9716, 77.5946),
    NGO("ngo5", "City Harvest", "+1-646-412-0700", "New York, USA", 40.7128, -74.0060),
    NGO("ngo6", "The Felix Project", "+44-20-3034-4370", "London, UK", 51.5072, -0.1276),
    NGO("ngo7", "OzHarvest", "+61-2-9516-3877", "Sydney, Australia", -33.8688, 151.2093),
    NGO("ngo8", "Second Harvest Japan", "+81-3-5822-5371", "Tokyo, Japan", 35.6895, 139.6917),
)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _check_coordinates(lat, lon):
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid coordinates: {lat!r}, {lon!r}")
    if math.isnan(lat) or math.isnan(lon) or not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise ValidationError(f"Coordinates out of range: {lat}, {lon}")
    return lat, lon


def find_nearby_ngos(lat: float, lon: float, radius_km: float = NGO_SEARCH_RADIUS_KM,
                     directory: Sequence[NGO] = SAMPLE_NGOS) -> List[NGO]:
    """NGOs within radius_km of (lat, lon), nearest first."""
    lat, lon = _check_coordinates(lat, lon)
    with_distance = [ngo.with_distance(haversine_km(lat, lon, ngo.latitude, ngo.longitude)) for ngo in directory]
    nearby = [ngo for ngo in with_distance if ngo.distance_km <= radius_km]
    nearby.sort(key=lambda ngo: ngo.distance_km)
    return nearby
