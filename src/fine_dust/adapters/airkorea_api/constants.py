"""Constants for the AirKorea adapter.

AirKorea real-time air quality APIs on the public data portal (data.go.kr).
Authentication is a per-account service key passed as `serviceKey`.
"""

# Operation paths, relative to the configured base URL
REALTIME_BY_REGION_PATH = "/ArpltnInforInqireSvc/getCtprvnRltmMesureDnsty"
REALTIME_BY_STATION_PATH = "/ArpltnInforInqireSvc/getMsrstnAcctoRltmMesureDnsty"
NEARBY_STATIONS_PATH = "/MsrstnInfoInqireSvc/getNearbyMsrstnList"

# Envelope result code for success
RESULT_CODE_OK = "00"

# Query defaults
REGION_PAGE_SIZE = 100
STATION_PAGE_SIZE = 24  # One day of hourly readings
DATA_TERM = "DAILY"
REGION_API_VERSION = "1.0"
STATION_API_VERSION = "1.3"
NEARBY_API_VERSION = "1.1"

# Value AirKorea sends for grades it could not compute
DEFAULT_GRADE = 1
