"""Great-circle distance on a spherical Earth."""

import math

EARTH_RADIUS_KM = 6371.0


def great_circle_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in kilometres between two coordinates given in degrees.

    Spherical law of cosines; the acos argument is clamped to [-1, 1] so
    identical or antipodal points never produce a domain error.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_lambda = math.radians(lng2) - math.radians(lng1)

    cosine = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(phi2) * math.cos(
        delta_lambda
    )
    return EARTH_RADIUS_KM * math.acos(max(-1.0, min(1.0, cosine)))


def distance_expression(lat: float, lng: float) -> dict:
    """Same formula as an aggregation expression over ``$latitude``/``$longitude``."""
    cosine = {
        "$add": [
            {
                "$multiply": [
                    {"$sin": {"$degreesToRadians": "$latitude"}},
                    {"$sin": {"$degreesToRadians": lat}},
                ]
            },
            {
                "$multiply": [
                    {"$cos": {"$degreesToRadians": "$latitude"}},
                    {"$cos": {"$degreesToRadians": lat}},
                    {
                        "$cos": {
                            "$subtract": [
                                {"$degreesToRadians": "$longitude"},
                                {"$degreesToRadians": lng},
                            ]
                        }
                    },
                ]
            },
        ]
    }
    clamped = {"$min": [1, {"$max": [-1, cosine]}]}
    return {"$multiply": [EARTH_RADIUS_KM, {"$acos": clamped}]}
