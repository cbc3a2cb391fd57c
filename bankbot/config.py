import os
import yaml
from dotenv import load_dotenv

def load_config(config_path: str = None):
    """Loads configuration from .env and config.yaml."""
    dotenv_path = os.path.join(os.path.dirname(__file__), '..', '.env')
    load_dotenv(dotenv_path=dotenv_path)

    config = {
        "openai_api_key": os.getenv("OPENAI_API_KEY"),
        "llm_model": os.getenv("LLM_MODEL", "gpt-4o"),
        "llm_temperature": float(os.getenv("LLM_TEMPERATURE", 0.0)),
        "nlu_enabled": os.getenv("NLU_ENABLED", "true").lower() == "true",
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "faq_path": os.getenv("FAQ_PATH", "./config/faq.yaml"),
        "qna_top_k": int(os.getenv("QNA_TOP_K", 3)),
        "qna_score_threshold": float(os.getenv("QNA_SCORE_THRESHOLD", 0.5)),
        "embedding_model": os.getenv("EMBEDDING_MODEL", "all-MiniLM-L6-v2"),
        "account": {
            "username": "John Doe",
            "balance": 500,
            "seed_transactions": [],
        },
        "survey": {"cadence": 3},
        "upsell": {"transactions_threshold": 3},
        "cards": {},
    }

    config_path = config_path or os.path.join(os.path.dirname(__file__), "..", "config", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            yaml_config = yaml.safe_load(f)
            if yaml_config:
                for key, value in yaml_config.items():
                    # A partial section keeps the defaults of the keys it leaves out.
                    if isinstance(value, dict) and isinstance(config.get(key), dict):
                        config[key] = {**config[key], **value}
                    else:
                        config[key] = value

    return config

APP_CONFIG = load_config()
