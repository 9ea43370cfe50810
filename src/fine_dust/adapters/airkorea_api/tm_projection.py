"""WGS84 to AirKorea TM coordinate conversion.

The nearby-station API expects coordinates on the Korean central-origin
transverse Mercator grid, defined on the Bessel 1841 ellipsoid with the Tokyo
datum. Conversion is a three-parameter datum shift followed by the
transverse Mercator series expansion.
"""

import math

# WGS84 ellipsoid
WGS84_A = 6378137.0
WGS84_F = 1 / 298.257223563

# Bessel 1841 ellipsoid
BESSEL_A = 6377397.155
BESSEL_F = 1 / 299.1528128

# Tokyo datum -> WGS84 translation in meters (Korean region parameters)
TOKYO_TO_WGS84 = (-146.43, 507.89, 681.46)

# Central origin of the TM grid
ORIGIN_LATITUDE = 38.0
ORIGIN_LONGITUDE = 127.0028902777778  # 127°00'10.405"
SCALE_FACTOR = 1.0
FALSE_EASTING = 200000.0
FALSE_NORTHING = 500000.0


def _eccentricity_squared(f: float) -> float:
    return f * (2 - f)


def _geodetic_to_ecef(lat: float, lon: float, a: float, e2: float) -> tuple[float, float, float]:
    phi = math.radians(lat)
    lam = math.radians(lon)
    n = a / math.sqrt(1 - e2 * math.sin(phi) ** 2)
    x = n * math.cos(phi) * math.cos(lam)
    y = n * math.cos(phi) * math.sin(lam)
    z = n * (1 - e2) * math.sin(phi)
    return x, y, z


def _ecef_to_geodetic(x: float, y: float, z: float, a: float, e2: float) -> tuple[float, float]:
    p = math.hypot(x, y)
    lon = math.atan2(y, x)
    lat = math.atan2(z, p * (1 - e2))
    for _ in range(6):
        n = a / math.sqrt(1 - e2 * math.sin(lat) ** 2)
        h = p / math.cos(lat) - n
        lat = math.atan2(z, p * (1 - e2 * n / (n + h)))
    return math.degrees(lat), math.degrees(lon)


def wgs84_to_tokyo(lat: float, lon: float) -> tuple[float, float]:
    """Shift a WGS84 latitude/longitude onto the Tokyo datum (Bessel)."""
    x, y, z = _geodetic_to_ecef(lat, lon, WGS84_A, _eccentricity_squared(WGS84_F))
    dx, dy, dz = TOKYO_TO_WGS84
    return _ecef_to_geodetic(x - dx, y - dy, z - dz, BESSEL_A, _eccentricity_squared(BESSEL_F))


def _meridian_arc(phi: float, a: float, e2: float) -> float:
    e4 = e2 * e2
    e6 = e4 * e2
    return a * (
        (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * phi
        - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * math.sin(2 * phi)
        + (15 * e4 / 256 + 45 * e6 / 1024) * math.sin(4 * phi)
        - (35 * e6 / 3072) * math.sin(6 * phi)
    )


def project_tm(lat: float, lon: float) -> tuple[float, float]:
    """Project a Bessel latitude/longitude onto the central-origin TM grid.

    Returns:
        (tm_x, tm_y) in meters, easting first.
    """
    a = BESSEL_A
    e2 = _eccentricity_squared(BESSEL_F)
    ep2 = e2 / (1 - e2)

    phi = math.radians(lat)
    phi0 = math.radians(ORIGIN_LATITUDE)
    lam = math.radians(lon)
    lam0 = math.radians(ORIGIN_LONGITUDE)

    n = a / math.sqrt(1 - e2 * math.sin(phi) ** 2)
    t = math.tan(phi) ** 2
    c = ep2 * math.cos(phi) ** 2
    big_a = (lam - lam0) * math.cos(phi)
    m = _meridian_arc(phi, a, e2)
    m0 = _meridian_arc(phi0, a, e2)

    x = SCALE_FACTOR * n * (
        big_a
        + (1 - t + c) * big_a**3 / 6
        + (5 - 18 * t + t * t + 72 * c - 58 * ep2) * big_a**5 / 120
    )
    y = SCALE_FACTOR * (
        m
        - m0
        + n
        * math.tan(phi)
        * (
            big_a**2 / 2
            + (5 - t + 9 * c + 4 * c * c) * big_a**4 / 24
            + (61 - 58 * t + t * t + 600 * c - 330 * ep2) * big_a**6 / 720
        )
    )
    return FALSE_EASTING + x, FALSE_NORTHING + y


def wgs84_to_tm(lat: float, lon: float) -> tuple[float, float]:
    """Convert a WGS84 latitude/longitude to AirKorea TM (tm_x, tm_y)."""
    tokyo_lat, tokyo_lon = wgs84_to_tokyo(lat, lon)
    return project_tm(tokyo_lat, tokyo_lon)
