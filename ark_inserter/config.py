from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_DSPACE_URL = "https://dataspace.princeton.edu"

# Fixed position of the results table on the DataSpace simple-search page.
DSPACE_RESULTS_SELECTOR = (
    "#content > div:nth-child(2) > div > div.col-md-9"
    " > div.discovery-result-results > div > table"
)

ARK_RESOLVER_BASE = "http://arks.princeton.edu/ark:"


class Settings(BaseSettings):
    dspace_url: str = DEFAULT_DSPACE_URL
    dspace_results_selector: str = DSPACE_RESULTS_SELECTOR
    ark_resolver_base: str = ARK_RESOLVER_BASE

    # Wrap the title in double quotes when querying DataSpace
    quote_query: bool = False

    # Matching
    allow_empty_title_match: bool = True
    title_overrides_path: Path | None = None

    # Rate limits (requests per second)
    dspace_rps: float = 2.0
    request_timeout: float = 30.0

    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ARK_INSERTER_",
    }


settings = Settings()
