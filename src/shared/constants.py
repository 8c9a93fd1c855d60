from enum import Enum

# WGS84 geographic CRS (EPSG)
WGS84_CODE = 4326

# EPSG bases for WGS84 / UTM zones: 326zz north, 327zz south
EPSG_UTM_NORTH_BASE = 32600
EPSG_UTM_SOUTH_BASE = 32700

# WGS84 semi-major axis (metres)
WGS84_SEMI_MAJOR_AXIS_M = 6378137.0

# WGS84 flattening
WGS84_FLATTENING = 1 / 298.257223563

# Mean Earth radius for the spherical (Haversine) distance, km
EARTH_RADIUS_KM = 6371.0

# Latitude / longitude limits (degrees)
LATITUDE_MIN = -90.0
LATITUDE_MAX = 90.0
LONGITUDE_MIN = -180.0
LONGITUDE_MAX = 180.0

# UTM scale factor on the central meridian
UTM_SCALE_FACTOR = 0.9996

# UTM false easting (metres)
UTM_FALSE_EASTING_M = 500_000.0

# UTM false northing for the southern hemisphere (metres)
UTM_FALSE_NORTHING_SOUTH_M = 10_000_000.0

# Zone width and count
UTM_ZONE_WIDTH_DEG = 6
MIN_UTM_ZONE = 1
MAX_UTM_ZONE = 60

# Latitude bands, 8 degrees each starting at -80; I and O are skipped,
# X is repeated so that 72..84 stays a single band
UTM_BAND_LETTERS = 'CDEFGHJKLMNPQRSTUVWXX'
UTM_BAND_HEIGHT_DEG = 8
UTM_LATITUDE_MIN = -80.0
UTM_LATITUDE_MAX = 84.0  # exclusive

# First band letter of the northern hemisphere
UTM_FIRST_NORTHERN_BAND = 'N'

# Largest distance from the central meridian / equator the inverse accepts (metres)
UTM_MAX_EASTING_OFFSET_M = 1_000_000.0
UTM_MAX_NORTHING_OFFSET_M = 10_000_000.0

# Newton iteration on the inverse projection
UTM_INVERSE_TOLERANCE = 1e-12
UTM_INVERSE_MAX_ITERATIONS = 20

# Default output precision (digits after the decimal point)
DECIMAL_PRECISION = 6
DMS_SECONDS_PRECISION = 4
DM_MINUTES_PRECISION = 4
UTM_PRECISION = 3

# Default separators
DECIMAL_SEPARATOR = ', '
ANGLE_SEPARATOR = ' '

# Settings file
SETTINGS_ENV_VAR = 'GEOCOORD_SETTINGS'
SETTINGS_DIR_NAME = 'geocoord'
SETTINGS_FILE_NAME = 'settings.toml'

# Exit codes of the command line front-end
EXIT_OK = 0
EXIT_REJECTED_INPUT = 2


class CoordinateFormat(str, Enum):
    DECIMAL = 'decimal'
    DMS = 'dms'
    DM = 'dm'
    UTM = 'utm'
    WKT = 'wkt'
    GEOJSON = 'geojson'
    POSTGIS = 'postgis'


class PolygonFormat(str, Enum):
    WKT = 'wkt'
    GEOJSON = 'geojson'
    POSTGIS = 'postgis'


# Human-readable names for CLI help
COORDINATE_FORMAT_LABELS: dict[CoordinateFormat, str] = {
    CoordinateFormat.DECIMAL: 'Decimal degrees',
    CoordinateFormat.DMS: 'Degrees, minutes, seconds',
    CoordinateFormat.DM: 'Degrees, decimal minutes',
    CoordinateFormat.UTM: 'Universal Transverse Mercator',
    CoordinateFormat.WKT: 'Well-Known Text',
    CoordinateFormat.GEOJSON: 'GeoJSON',
    CoordinateFormat.POSTGIS: 'PostGIS EWKT',
}
