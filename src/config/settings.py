# src/config/settings.py

"""Central configuration for the ali_recommend exporter."""

from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral


class Settings:
    """Central configuration for the ali_recommend exporter."""

    # --- Endpoint ---
    RECOMMEND_API: str = (
        "https://gpsfront.aliexpress.com/getRecommendingResults.do"
        "?callback={callback}&widget_id={widget_id}&platform=pc"
        "&limit={limit}&offset={offset}&phase=1&productIds2Top="
        "&postback={postback}&_={cache_token}"
    )
    JSONP_CALLBACK: str = "jQuery18304448626992519271_1615039477717"
    WIDGET_ID: str = "5547572"
    POSTBACK_ID: str = "d01662bf-8801-4098-9de0-85607712e3cc"
    CACHE_TOKEN: str = "1615039939479"

    # --- Paging ---
    PAGE_SIZE: int = 40                 # Upstream cap on items per request
    DEFAULT_QUANTITY: int = 100         # Items requested per run

    # --- HTTP ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
        "Referer": "https://aliexpress.com/",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "script",
        "sec-fetch-mode": "no-cors",
        "sec-fetch-site": "same-site",
    }

    # --- Output ---
    TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    OUTPUT_FILENAME: str = "product_info.csv"  # JSON text, legacy name

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
