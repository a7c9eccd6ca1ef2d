# services/pathway_engine/config.py
# Environment-driven settings for the pathway engine.

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists, for local development
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

ASSETS_DIR = Path(__file__).resolve().parents[2] / "assets"


class EngineSettings(BaseSettings):
    reference_data_path: str = str(ASSETS_DIR / "reference_data.yml")
    rules_path: str = str(ASSETS_DIR / "recommendation_rules.yml")
    max_items: int = Field(6, ge=1, description="Names kept per list for enrichment and plans")
    log_level: str = "INFO"
    reliability_threshold: float = Field(0.7, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(env_prefix='PATHWAY_')


# Instantiate settings
engine_settings = EngineSettings()
