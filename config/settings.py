"""Application configuration settings."""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from dotenv import load_dotenv

load_dotenv()


@dataclass
class MapConfig:
    """PyDeck map configuration."""

    # Training office (reference point) neighbourhood
    center_lat: float = 42.3011
    center_lon: float = -71.2169
    default_zoom: int = 12
    default_pitch: int = 0
    default_bearing: int = 0

    # Preselected in the map tutorial sidebar
    default_tile_provider: str = field(
        default_factory=lambda: os.getenv("MAP_TILE_PROVIDER", "CartoDB.Positron")
    )

    # Marker defaults (pin size in pixels, radii in meters)
    marker_size: int = 40
    circle_radius: int = 120
    min_radius: float = 40.0
    max_radius: float = 600.0
    radius_scale: float = 0.05
    default_opacity: float = 0.8

    # Study area polygon buffer around the points
    study_area_buffer_m: float = 500.0

    height: int = 600


@dataclass
class CategoryConfig:
    """Point categories and their marker colors."""

    reference_category: str = "office"
    distance_category: str = "restaurant"

    categories: List[str] = field(
        default_factory=lambda: [
            "office",
            "restaurant",
            "park",
        ]
    )

    # Color mapping for categories (RGBA)
    colors: Dict[str, Tuple[int, int, int, int]] = field(
        default_factory=lambda: {
            "office": (220, 20, 60, 230),
            "restaurant": (255, 140, 0, 200),
            "park": (34, 139, 34, 200),
        }
    )


@dataclass
class TileProviderConfig:
    """Named tile providers, as (pydeck map_provider, map_style) pairs."""

    # Drawn by add_tiles()
    base_provider: str = field(
        default_factory=lambda: os.getenv("MAP_BASE_PROVIDER", "CartoDB.Voyager")
    )

    providers: Dict[str, Tuple[str, str]] = field(
        default_factory=lambda: {
            "CartoDB.Positron": ("carto", "light"),
            "CartoDB.PositronNoLabels": ("carto", "light_no_labels"),
            "CartoDB.DarkMatter": ("carto", "dark"),
            "CartoDB.DarkMatterNoLabels": ("carto", "dark_no_labels"),
            "CartoDB.Voyager": ("carto", "road"),
            "Mapbox.Light": ("mapbox", "light"),
            "Mapbox.Dark": ("mapbox", "dark"),
            "Mapbox.Streets": ("mapbox", "road"),
            "Mapbox.Satellite": ("mapbox", "satellite"),
            "Google.Roadmap": ("google_maps", "road"),
            "Google.Satellite": ("google_maps", "satellite"),
        }
    )

    # Providers other than carto need a key
    api_keys: Dict[str, str] = field(
        default_factory=lambda: {
            "mapbox": os.getenv("MAPBOX_API_KEY", ""),
            "google_maps": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        }
    )


@dataclass
class DashboardConfig:
    """Streamlit page configuration."""

    page_title: str = "Shiny training module"
    page_icon: str = "📊"
    layout: str = "wide"
    map_page_title: str = "Restaurant map tutorial"
    map_page_icon: str = "🗺️"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_dir: str = field(
        default_factory=lambda: os.getenv(
            "LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs")
        )
    )
    log_file: str = "tutorial.log"
    file_logging: bool = field(
        default_factory=lambda: os.getenv("LOG_TO_FILE", "true").lower() in ("true", "1", "yes")
    )


@dataclass
class Settings:
    """Main application settings."""

    map: MapConfig = field(default_factory=MapConfig)
    categories: CategoryConfig = field(default_factory=CategoryConfig)
    tiles: TileProviderConfig = field(default_factory=TileProviderConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Layer types available
    layer_types: List[str] = field(
        default_factory=lambda: ["marker", "circle", "polygon", "text"]
    )


# Singleton settings instance
settings = Settings()
