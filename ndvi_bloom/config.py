"""
Configuration
=============
Central registry for file paths and constants used by the NDVI bloom explorer.
"""
import logging
import os

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(BASE_DIR, "data")

# Dataset source: a local JSON file or an http(s) URL
DATA_SOURCE = os.path.join(DATA_DIR, "ndvi_data.json")
FETCH_TIMEOUT = 10  # seconds, only used for URLs

# Map (centered on India)
MAP_CENTER = (20.5937, 78.9629)
MAP_ZOOM = 4
MAP_HEIGHT = 500
TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/">OpenStreetMap</a> contributors'

# NDVI threshold for bloom
BLOOM_THRESHOLD = 0.65

# Chart
CHART_TITLE = "NDVI Trend"
CHART_LABELS = [f"Step {i}" for i in range(1, 9)]
CHART_LINE_COLOR = "#2e8b57"
CHART_FILL_COLOR = "rgba(72,255,156,0.3)"
CHART_SMOOTHING = 0.3

# Page
SHOW_START_BUTTON = True
MAP_SECTION_ID = "mapSection"

LOG_LEVEL = logging.INFO
LOG_FILE = None  # path to also write logs to, e.g. os.path.join(BASE_DIR, "ndvi_bloom.log")
