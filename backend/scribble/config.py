import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    # Socket.IO
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Rooms
    AUTO_CREATE_ROOMS = os.environ.get("AUTO_CREATE_ROOMS", "1") == "1"

    # Round flow
    ROUND_DURATION_SEC = int(os.environ.get("ROUND_DURATION_SEC", "60"))
    TICK_INTERVAL_SEC = float(os.environ.get("TICK_INTERVAL_SEC", "1"))
    COOLDOWN_SEC = float(os.environ.get("COOLDOWN_SEC", "5"))
    # "all": every non-drawing player counts; "humans": only human players
    ELIGIBLE_GUESSERS = os.environ.get("ELIGIBLE_GUESSERS", "all")

    # Simulated agent guesses
    AI_GUESS_CHANCE = float(os.environ.get("AI_GUESS_CHANCE", "0.2"))
    AI_CORRECT_CHANCE = float(os.environ.get("AI_CORRECT_CHANCE", "0.3"))
    AI_MIN_ELAPSED_SEC = int(os.environ.get("AI_MIN_ELAPSED_SEC", "10"))

    # Scoring: "flat" or "time_decay"
    SCORING_MODE = os.environ.get("SCORING_MODE", "flat")
    GUESSER_POINTS = int(os.environ.get("GUESSER_POINTS", "10"))
    DRAWER_POINTS = int(os.environ.get("DRAWER_POINTS", "10"))
    TIME_BONUS_MAX = int(os.environ.get("TIME_BONUS_MAX", "5"))
    TIME_BONUS_WINDOW_SEC = int(os.environ.get("TIME_BONUS_WINDOW_SEC", "60"))

    # AI gateway
    AI_GATEWAY_URL = os.environ.get("AI_GATEWAY_URL", "https://gateway.vercel.sh/v1/chat/completions")
    AI_GATEWAY_TOKEN = os.environ.get("AI_GATEWAY_TOKEN", "") or os.environ.get("VERCEL_AI_GATEWAY_TOKEN", "")
    AI_GUESS_MODEL = os.environ.get("AI_GUESS_MODEL", "google/gemini-1.5-flash")
    AI_RETRIES = int(os.environ.get("AI_RETRIES", "2"))
    AI_RETRY_DELAY_SEC = float(os.environ.get("AI_RETRY_DELAY_SEC", "0.3"))
    AI_TIMEOUT_SEC = float(os.environ.get("AI_TIMEOUT_SEC", "45"))
    AI_MOCK_FALLBACK = os.environ.get("AI_MOCK_FALLBACK", "0") == "1"
