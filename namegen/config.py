from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Cohere text generation
    cohere_api_key: str = ""
    cohere_base_url: str = "https://api.cohere.ai/v1"
    generation_model: str = "command"
    generation_max_tokens: int = 15
    generation_temperature: float = 0.8
    generation_timeout_seconds: float = 30.0

    # Pipeline
    min_candidates: int = 3
    max_lines_per_round: int = 5
    probe_delay_ms: int = 50  # pacing between extension probes

    # Caller state
    history_limit: int = 20
    state_path: str = ".cache/state/saasNameGenState.json"

    # App
    cors_origins: str = "http://localhost:5173"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
