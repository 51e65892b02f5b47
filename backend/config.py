import os

# Optional GeoJSON map registered as "default" at startup
DEFAULT_MAP_PATH = os.environ.get("STREETSAMPLER_DEFAULT_MAP", "").strip() or None
DEFAULT_MAP_ID = "default"

# Scale applied to loaded maps (100 = metres → centimetres)
MAP_SCALE = float(os.environ.get("STREETSAMPLER_MAP_SCALE", "1.0"))

# Set STREETSAMPLER_PROJECT=1 to project lon/lat input to UTM on load
PROJECT_LONLAT = os.environ.get("STREETSAMPLER_PROJECT", "").strip() in ("1", "true", "yes")

CORS_ORIGINS = [
    o.strip() for o in
    os.environ.get("STREETSAMPLER_CORS_ORIGINS",
                   "http://localhost:5174,http://127.0.0.1:5174").split(",")
    if o.strip()
]
