"""NGO domain entity: a partner food bank with a fixed location."""
from typing import Optional


class NGO:
    def __init__(self, id: str, name: str, contact: str, address: str,
                 latitude: float, longitude: float, distance_km: Optional[float] = None):
        self.id = id
        self.name = name
        self.contact = contact
        self.address = address
        self.latitude = latitude
        self.longitude = longitude
        self.distance_km = distance_km

    def with_distance(self, distance_km: float) -> "NGO":
        return NGO(self.id, self.name, self.contact, self.address,
                   self.latitude, self.longitude, distance_km)

    def __str__(self) -> str:
        dist = f" - {self.distance_km:.1f} km" if self.distance_km is not None else ""
        return f"{self.name} ({self.address}){dist}"

    __repr__ = __str__

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "contact": self.contact,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "distance_km": round(self.distance_km, 1) if self.distance_km is not None else None,
        }
