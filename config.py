import os
from dotenv import load_dotenv

load_dotenv()

def _optional_int(name):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)

class Config:
    # Self-hosted Bot API server, e.g. "http://localhost:8081/bot{0}/{1}"
    TELEGRAM_API_URL = os.getenv('TELEGRAM_API_URL')
    UPLOAD_TIMEOUT = _optional_int('UPLOAD_TIMEOUT')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    READ_CHUNK_SIZE = int(os.getenv('READ_CHUNK_SIZE', 64 * 1024))
