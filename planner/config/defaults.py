"""Default provider parameters and imagery endpoints."""

# NASA POWER daily parameters
NASA_TEMP_PARAM = "T2M"  # Daily mean 2 m air temperature (C)
NASA_RAIN_PARAM = "PRECTOTCORR"  # Corrected total precipitation (mm/day)
NASA_WIND_PARAM = "WS2M"  # Daily mean 2 m wind speed (m/s)
NASA_COMMUNITY = "AG"
NASA_FILL_VALUE = -999.0

# Meteomatics parameters, unit is the suffix after ':'
METEOMATICS_TEMP_PARAM = "t_2m:C"
METEOMATICS_RAIN_PARAM = "precip_24h:mm"
METEOMATICS_WIND_PARAM = "wind_speed_10m:ms"
METEOMATICS_MISSING_VALUES = (-999.0, -666.0)

DEFAULT_IMAGERY_SERVICES: list[tuple[str, str]] = [
    (
        "ArcGIS World Imagery",
        "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer",
    ),
    (
        "NASA MODIS",
        "https://map1.vis.earthdata.nasa.gov/wmts-webmerc/MODIS_Terra_CorrectedReflectance_TrueColor",
    ),
    ("OpenStreetMap", "https://tile.openstreetmap.org"),
]
