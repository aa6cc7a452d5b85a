from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Flight search (Sky-Scrapper on RapidAPI)
    rapidapi_key: str = ""
    rapidapi_host: str = "sky-scrapper.p.rapidapi.com"
    rapidapi_base_url: str = "https://sky-scrapper.p.rapidapi.com/api/v1"
    flight_search_timeout: float = 30.0
    flight_search_max_results: int = 3

    # Budget analysis
    default_budget: int = 2000
    budget_tolerance: float = 0.05
    currency: str = "USD"

    # Staged progress pacing (1.0 = UI pacing, 0 = no delay)
    analysis_stage_delay_scale: float = 0.0

    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:8080"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
