"""
CovidStats - Centralized Configuration

All environment variables, constants, and settings in one place.
"""

import os
from dataclasses import dataclass


@dataclass
class Config:
    """Application configuration loaded from environment."""

    # Endpoints
    opencovid_api_url: str = "https://api.opencovid.ca"
    timeline_data_url: str = "https://raw.githubusercontent.com/ccodwg/CovidTimelineCanada/main"
    http_timeout: float = 15.0

    # Cache settings
    catalog_cache_ttl: int = 86400       # 24 hours
    timeseries_cache_ttl: int = 1800     # 30 minutes
    completeness_cache_ttl: int = 1800   # 30 minutes
    max_cache_size: int = 1000

    # Chart settings
    rolling_window: int = 7
    preserve_annotation: bool = False

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        rolling_window = int(os.environ.get('ROLLING_WINDOW', 7))
        if rolling_window < 1:
            raise ValueError(f"ROLLING_WINDOW must be at least 1, got {rolling_window}")

        return cls(
            opencovid_api_url=os.environ.get('OPENCOVID_API_URL', cls.opencovid_api_url).rstrip('/'),
            timeline_data_url=os.environ.get('TIMELINE_DATA_URL', cls.timeline_data_url).rstrip('/'),
            http_timeout=float(os.environ.get('HTTP_TIMEOUT', 15.0)),

            catalog_cache_ttl=int(os.environ.get('CATALOG_CACHE_TTL', 86400)),
            timeseries_cache_ttl=int(os.environ.get('TIMESERIES_CACHE_TTL', 1800)),
            completeness_cache_ttl=int(os.environ.get('COMPLETENESS_CACHE_TTL', 1800)),

            rolling_window=rolling_window,
            preserve_annotation=os.environ.get('PRESERVE_ANNOTATION', '').lower() == 'true',
            log_level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        )


# Global config instance
config = Config.from_env()


# Canada plus the 13 provinces and territories
REGION_NAMES = {
    'CAN': 'Canada',
    'AB': 'Alberta',
    'BC': 'British Columbia',
    'MB': 'Manitoba',
    'NB': 'New Brunswick',
    'NL': 'Newfoundland and Labrador',
    'NS': 'Nova Scotia',
    'NT': 'Northwest Territories',
    'NU': 'Nunavut',
    'ON': 'Ontario',
    'PE': 'Prince Edward Island',
    'QC': 'Quebec',
    'SK': 'Saskatchewan',
    'YT': 'Yukon',
}

COUNTRY_CODE = 'CAN'

# Territories are excluded: national completeness only waits on the provinces
REQUIRED_PROVINCES = frozenset({'AB', 'BC', 'MB', 'NB', 'NL', 'NS', 'ON', 'PE', 'QC', 'SK'})

# Metrics whose national totals are annotated with the completeness date
COMPLETENESS_METRICS = frozenset({'cases', 'deaths', 'tests_completed'})

# Catalog entries the dashboard cannot chart
UNSUPPORTED_METRICS = ('hosp_admissions', 'icu_admissions')

TESTING_NOTE = 'Testing was restricted in late 2021/early 2022.'
